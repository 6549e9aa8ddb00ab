"""
Subscriber IED classification.

Given the selected GSEControl and its DataSet, every IED of the
document except the publisher is put into one bucket:

- subscribed: linked count >= number of FCDAs in the data set
- partially subscribed: 0 < linked count < number of FCDAs
- not subscribed: linked count == 0 (including IEDs without Inputs)

The thresholds are tested in that order, so an empty data set makes
every IED subscribed (0 >= 0).

With the default CountPolicy.OCCURRENCES one link is counted per
(FCDA, Inputs) pair that has a matching ExtRef. An FCDA linked from two
Inputs of the same IED is counted twice. CountPolicy.DISTINCT counts
each FCDA at most once per IED.

Usage:
    from subscription.classifier import classify_ieds
    result = classify_ieds(root, gse_control, dataset)
    for ied in result.subscribed:
        print(ied.name)
"""

import logging
from typing import Any, List, Optional, Sequence

from config.scl_schema import ATTR_NAME
from config.settings import DEFAULT_CONFIG, CountPolicy, SubscriptionConfig
from core import ClassificationResult, FcdaReference, SubscriberIed, extref_matches
from utils.scl_utils import get_extrefs, get_fcdas, get_ied_name, get_ieds, get_inputs

logger = logging.getLogger(__name__)


def classify_ieds(
        root: Any,
        gse_control: Optional[Any],
        dataset: Optional[Any],
        config: SubscriptionConfig = DEFAULT_CONFIG
) -> ClassificationResult:
    """
    Classify all IEDs of a document against the selected data set.

    This is a pure function of the document at call time; nothing is
    cached between calls.

    Args:
        root: Document root element
        gse_control: Selected GSEControl, None if nothing is selected
        dataset: DataSet of the control, None if absent
        config: Settings (count policy)

    Returns:
        ClassificationResult with subscribed and available IEDs
    """
    result = ClassificationResult()
    if gse_control is None:
        return result

    publisher = get_ied_name(gse_control)
    references = [FcdaReference.from_element(fcda) for fcda in get_fcdas(dataset)]
    result.total_fcdas = len(references)

    for ied in get_ieds(root):
        if ied.get(ATTR_NAME) == publisher:
            continue

        count = count_linked_fcdas(
            get_inputs(ied), references, publisher, config.count_policy
        )

        if count >= result.total_fcdas:
            result.subscribed.append(SubscriberIed(ied, linked_count=count))
        elif count > 0:
            result.available.append(SubscriberIed(ied, partial=True, linked_count=count))
        else:
            result.available.append(SubscriberIed(ied))

    logger.info(
        f"Classified IEDs for {publisher} {gse_control.get(ATTR_NAME)}: "
        f"{len(result.subscribed)} subscribed, "
        f"{len(result.partially_subscribed)} partial, "
        f"{len(result.not_subscribed)} not subscribed"
    )

    return result


def count_linked_fcdas(
        inputs: Sequence[Any],
        references: Sequence[FcdaReference],
        publisher: Optional[str],
        policy: CountPolicy = CountPolicy.OCCURRENCES
) -> int:
    """
    Count links from a set of Inputs to the given FCDA references.

    Args:
        inputs: Inputs elements of one IED
        references: References of the data set FCDAs, in order
        publisher: Name of the publishing IED
        policy: OCCURRENCES counts per (FCDA, Inputs) pair,
            DISTINCT counts per FCDA

    Returns:
        Number of counted links
    """
    if not inputs or not references:
        return 0

    extrefs_per_inputs: List[List[Any]] = [get_extrefs(element) for element in inputs]

    count = 0
    for reference in references:
        matches = [
            any(extref_matches(extref, reference, publisher) for extref in extrefs)
            for extrefs in extrefs_per_inputs
        ]
        if policy is CountPolicy.DISTINCT:
            count += 1 if any(matches) else 0
        else:
            count += sum(matches)

    return count
