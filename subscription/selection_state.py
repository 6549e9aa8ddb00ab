"""
Publisher selection state and subscription dispatch.

SelectionState holds the selected GSEControl, its DataSet and the
classification of all other IEDs against it. Every change of selection
recomputes the classification from the document; there is no
incremental update.

A subscription request for an IED is dispatched on its current status:
a subscribed IED is unsubscribed, a partially subscribed or not
subscribed IED is subscribed. The resulting edit batch goes to the
action sink, and the classification is recomputed afterwards.

Usage:
    editor = DocumentEditor(root)
    state = SelectionState(editor.document, editor)
    state.select_publisher(gse_control)
    for ied in state.available_ieds:
        state.on_subscription(ied.element, SubscribeStatus.NONE)
"""

from typing import Any, Callable, List, Optional

from config.scl_schema import ATTR_NAME
from config.settings import DEFAULT_CONFIG, SubscriptionConfig
from config.validation import validate_selection
from core import ClassificationResult, EditBatch, SubscribeStatus, SubscriberIed
from logging_config import get_logger, log_classification, log_edit_batch
from subscription.classifier import classify_ieds
from subscription.subscribe import subscribe
from subscription.unsubscribe import unsubscribe
from utils.scl_utils import get_dataset, get_ied_name

logger = get_logger(__name__)

DocumentProvider = Callable[[], Any]
ActionSink = Callable[[EditBatch], None]


class SelectionState:
    """
    Selected publisher and the subscriber IEDs classified against it.

    Attributes:
        gse_control: Selected GSEControl, None when nothing is selected
        dataset: DataSet of the selected control, None if absent
        ied_name: Name of the IED owning the selected control
        result: Classification of the current selection
        config: Settings used for classification and edits
    """

    def __init__(
            self,
            document_provider: DocumentProvider,
            action_sink: ActionSink,
            config: Optional[SubscriptionConfig] = None
    ):
        """
        Initialize an empty selection.

        Args:
            document_provider: Returns the current document root
            action_sink: Applies an edit batch as one unit
            config: Settings (defaults to DEFAULT_CONFIG)
        """
        self._document_provider = document_provider
        self._action_sink = action_sink
        self.config = config or DEFAULT_CONFIG
        self.gse_control: Optional[Any] = None
        self.dataset: Optional[Any] = None
        self.ied_name: Optional[str] = None
        self.result = ClassificationResult()

    @property
    def subscribed_ieds(self) -> List[SubscriberIed]:
        return self.result.subscribed

    @property
    def available_ieds(self) -> List[SubscriberIed]:
        return self.result.available

    @property
    def partially_subscribed_ieds(self) -> List[SubscriberIed]:
        return self.result.partially_subscribed

    @property
    def not_subscribed_ieds(self) -> List[SubscriberIed]:
        return self.result.not_subscribed

    @property
    def title(self) -> str:
        """Selection label: "<iedName> > <control name>", or "IED" without one."""
        control_name = self.gse_control.get(ATTR_NAME) if self.gse_control is not None else None
        if not control_name:
            return "IED"
        return f"{self.ied_name} > {control_name}"

    def select_publisher(
            self,
            gse_control: Optional[Any],
            dataset: Optional[Any] = None
    ) -> ClassificationResult:
        """
        Select a publisher and classify all IEDs against its data set.

        Args:
            gse_control: GSEControl to select (None clears the selection)
            dataset: DataSet of the control; resolved through datSet if omitted

        Returns:
            The new classification result
        """
        if gse_control is not None and dataset is None:
            dataset = get_dataset(gse_control)

        self.gse_control = gse_control
        self.dataset = dataset
        self.ied_name = get_ied_name(gse_control)

        if gse_control is not None:
            validation = validate_selection(self._document_provider(), gse_control, dataset)
            for message in validation.errors + validation.warnings:
                logger.warning(f"Selection {self.title}: {message}")

        return self.refresh()

    def clear_selection(self) -> ClassificationResult:
        """Forget the selected publisher and empty both buckets."""
        return self.select_publisher(None)

    def refresh(self) -> ClassificationResult:
        """Recompute the classification against the current document."""
        self.result = classify_ieds(
            self._document_provider(), self.gse_control, self.dataset, self.config
        )
        if self.gse_control is not None:
            log_classification(self.result, self.title)
        return self.result

    def on_subscription(self, ied: Any, status: SubscribeStatus) -> EditBatch:
        """
        Subscribe or unsubscribe an IED depending on its current status.

        Args:
            ied: IED element the request is for
            status: Status of the IED when the request was made

        Returns:
            The computed edit batch (also handed to the action sink
            unless it is empty)
        """
        if status is SubscribeStatus.FULL:
            batch = unsubscribe(ied, self.gse_control, self.dataset, self.config)
        else:
            batch = subscribe(ied, self.gse_control, self.dataset, self.config)

        log_edit_batch(batch, ied.get(ATTR_NAME, ""))

        if batch or self.config.emit_empty_batches:
            self._action_sink(batch)
            self.refresh()

        return batch

    def toggle(self, ied: Any) -> EditBatch:
        """
        Dispatch a subscription request using the IED's current status.

        IEDs missing from the classification (such as the publisher)
        are treated as not subscribed.
        """
        status = self.result.status_of(ied) or SubscribeStatus.NONE
        return self.on_subscription(ied, status)
