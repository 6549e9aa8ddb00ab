"""
Tests for subscriber IED classification.

Run with: pytest tests/test_classifier.py -v
"""

import copy

import pytest

from config import CountPolicy, SubscriptionConfig
from core import FcdaReference, SubscribeStatus
from subscription import classify_ieds, count_linked_fcdas
from utils.scl_utils import get_fcdas, get_inputs


def names(ieds):
    return [ied.name for ied in ieds]


DOUBLE_LINKED_XML = """
  <IED name="IED6"><AccessPoint name="AP1"><Server><LDevice inst="LD1">
    <LN0 lnClass="LLN0" inst="">
      <Inputs>
        <ExtRef iedName="IED1" ldInst="LD1" lnClass="LLN0" doName="Do1"/>
      </Inputs>
    </LN0>
    <LN lnClass="PTRC" inst="1">
      <Inputs>
        <ExtRef iedName="IED1" ldInst="LD1" lnClass="LLN0" doName="Do1"/>
      </Inputs>
    </LN>
  </LDevice></Server></AccessPoint></IED>
"""


class TestClassifyIeds:
    """Tests for bucket assignment."""

    def test_station_buckets(self, station, find_control):
        """The example station splits into all three buckets."""
        control, dataset = find_control(station)
        result = classify_ieds(station, control, dataset)

        assert names(result.subscribed) == ["IED4"]
        assert names(result.partially_subscribed) == ["IED2"]
        assert names(result.not_subscribed) == ["IED3", "IED5"]
        assert result.total_fcdas == 2

    def test_publisher_is_excluded(self, station, find_control):
        control, dataset = find_control(station)
        result = classify_ieds(station, control, dataset)
        assert "IED1" not in names(result.subscribed) + names(result.available)
        assert result.status_of("IED1") is None

    def test_partial_ied_carries_count(self, station, find_control):
        control, dataset = find_control(station)
        result = classify_ieds(station, control, dataset)
        partial = result.partially_subscribed[0]
        assert partial.partial is True
        assert partial.linked_count == 1

    def test_status_of(self, station, find_control, find_ied):
        control, dataset = find_control(station)
        result = classify_ieds(station, control, dataset)
        assert result.status_of(find_ied(station, "IED4")) is SubscribeStatus.FULL
        assert result.status_of("IED2") is SubscribeStatus.PARTIAL
        assert result.status_of("IED3") is SubscribeStatus.NONE

    def test_no_selection_gives_empty_buckets(self, station):
        result = classify_ieds(station, None, None)
        assert result.subscribed == []
        assert result.available == []

    def test_empty_dataset_subscribes_everything(self, station, find_control):
        """With zero FCDAs every other IED is subscribed (0 >= 0)."""
        control, dataset = find_control(station, "GCB2")
        assert get_fcdas(dataset) == []

        result = classify_ieds(station, control, dataset)

        assert names(result.subscribed) == ["IED2", "IED3", "IED4", "IED5"]
        assert result.available == []

    def test_missing_dataset_behaves_like_empty(self, station, find_control):
        control, dataset = find_control(station, "GCB3")
        assert dataset is None
        result = classify_ieds(station, control, dataset)
        assert names(result.subscribed) == ["IED2", "IED3", "IED4", "IED5"]

    def test_classification_is_repeatable(self, station, find_control):
        control, dataset = find_control(station)
        first = classify_ieds(station, control, dataset)
        second = classify_ieds(station, control, dataset)
        assert first.to_dict() == second.to_dict()

    def test_works_without_namespace(self, bare_station, find_control):
        control, dataset = find_control(bare_station)
        result = classify_ieds(bare_station, control, dataset)
        assert names(result.subscribed) == ["IED4"]
        assert names(result.partially_subscribed) == ["IED2"]


class TestThresholds:
    """Tests for the Fully / Partially / Unlinked boundaries."""

    @pytest.mark.parametrize("linked, expected", [
        (["Do1", "Do2", "Do3"], SubscribeStatus.FULL),
        (["Do1", "Do2"], SubscribeStatus.PARTIAL),
        (["Do3"], SubscribeStatus.PARTIAL),
        ([], SubscribeStatus.NONE),
    ])
    def test_boundaries(self, scl_factory, find_control, linked, expected):
        extrefs = "".join(
            f'<ExtRef iedName="IED1" ldInst="LD1" lnClass="LLN0" doName="{do}"/>'
            for do in linked
        )
        root = scl_factory(f"""
          <IED name="IED6"><LDevice inst="LD1"><LN0 lnClass="LLN0" inst="">
            <Inputs>{extrefs}<ExtRef iedName="IED9" ldInst="LD1" lnClass="LLN0" doName="Do1"/></Inputs>
          </LN0></LDevice></IED>
        """)
        control, dataset = find_control(root)
        dataset.append(copy.deepcopy(dataset[0]))
        dataset[-1].set("doName", "Do3")

        result = classify_ieds(root, control, dataset)

        assert result.total_fcdas == 3
        assert result.status_of("IED6") is expected


class TestCountPolicy:
    """Tests for counting links found in several Inputs."""

    def test_occurrences_counts_every_inputs(self, scl_factory, find_control):
        """One FCDA linked from two Inputs is counted twice by default."""
        root = scl_factory(DOUBLE_LINKED_XML)
        control, dataset = find_control(root)

        result = classify_ieds(root, control, dataset)

        assert names(result.subscribed) == ["IED6"]
        assert result.subscribed[0].linked_count == 2

    def test_distinct_counts_each_fcda_once(self, scl_factory, find_control):
        root = scl_factory(DOUBLE_LINKED_XML)
        control, dataset = find_control(root)
        config = SubscriptionConfig(count_policy=CountPolicy.DISTINCT)

        result = classify_ieds(root, control, dataset, config)

        assert names(result.partially_subscribed) == ["IED6"]
        assert result.partially_subscribed[0].linked_count == 1

    def test_count_linked_fcdas_without_inputs(self, station, find_control, find_ied):
        _, dataset = find_control(station)
        references = [FcdaReference.from_element(f) for f in get_fcdas(dataset)]
        inputs = get_inputs(find_ied(station, "IED3"))
        assert count_linked_fcdas(inputs, references, "IED1") == 0
