"""
Tests for building unsubscribe (Disconnect) edit batches.

Run with: pytest tests/test_unsubscribe.py -v
"""

from core import Delete, identity
from subscription import classify_ieds, extend_delete_actions, subscribe, unsubscribe
from utils.edit_utils import apply_edit_batch
from utils.scl_utils import get_extrefs, get_inputs, get_ln0_inputs


class TestUnsubscribe:
    """Tests for the Disconnect batch."""

    def test_keeps_inputs_with_other_links(self, station, find_control, find_ied):
        """IED4 keeps its Inputs because a link to IED9 remains."""
        control, dataset = find_control(station)
        ied = find_ied(station, "IED4")

        batch = unsubscribe(ied, control, dataset)

        assert batch.title == "Disconnect"
        assert all(isinstance(a, Delete) for a in batch)
        assert [a.element.get("doName") for a in batch] == ["Do1", "Do2"]
        assert all(a.element.get("iedName") == "IED1" for a in batch)

    def test_empty_inputs_is_deleted_after_extrefs(self, station, find_control, find_ied):
        control, dataset = find_control(station)
        ied = find_ied(station, "IED2")
        inputs = get_ln0_inputs(ied)

        batch = unsubscribe(ied, control, dataset)

        assert len(batch) == 2
        assert batch.actions[0].element is get_extrefs(inputs)[0]
        assert batch.actions[1].element is inputs
        assert batch.actions[1].parent is inputs.getparent()
        assert batch.actions[1].element_identity == "IED2>LD1>LLN0>Inputs"

    def test_unlinked_ied_gives_empty_batch(self, station, find_control, find_ied):
        control, dataset = find_control(station)
        for name in ("IED3", "IED5"):
            assert unsubscribe(find_ied(station, name), control, dataset).is_empty

    def test_no_selection_gives_empty_batch(self, station, find_ied):
        assert unsubscribe(find_ied(station, "IED4"), None, None).is_empty

    def test_links_in_every_inputs_are_removed(self, scl_factory, find_control, find_ied):
        root = scl_factory("""
          <IED name="IED6"><LDevice inst="LD1">
            <LN0 lnClass="LLN0" inst="">
              <Inputs><ExtRef iedName="IED1" ldInst="LD1" lnClass="LLN0" doName="Do1"/></Inputs>
            </LN0>
            <LN lnClass="PTRC" inst="1">
              <Inputs>
                <ExtRef iedName="IED1" ldInst="LD1" lnClass="LLN0" doName="Do2"/>
                <ExtRef iedName="IED1" ldInst="LD1" lnClass="LLN0" doName="Do2"/>
              </Inputs>
            </LN>
          </LDevice></IED>
        """)
        control, dataset = find_control(root)

        batch = unsubscribe(find_ied(root, "IED6"), control, dataset)

        assert [a.element_identity for a in batch.deletes[-2:]] == [
            "IED6>LD1>LLN0>Inputs",
            "IED6>LD1>PTRC 1>Inputs",
        ]
        assert len(batch) == 5


class TestExtendDeleteActions:
    """Tests for the empty Inputs cleanup."""

    def test_no_extref_deletes_gives_no_actions(self):
        assert extend_delete_actions([]) == []

    def test_does_not_modify_the_document(self, station, find_ied):
        inputs = get_ln0_inputs(find_ied(station, "IED2"))
        extref = get_extrefs(inputs)[0]

        actions = extend_delete_actions([Delete(parent=inputs, element=extref)])

        assert len(actions) == 2
        assert extref.getparent() is inputs
        assert identity(actions[1].element) == "IED2>LD1>LLN0>Inputs"


class TestUnsubscribeApplied:
    """Tests applying the Disconnect batch to the document."""

    def test_unsubscribe_is_idempotent(self, station, find_control, find_ied):
        control, dataset = find_control(station)
        for name in ("IED2", "IED4"):
            ied = find_ied(station, name)
            apply_edit_batch(unsubscribe(ied, control, dataset), station)
            assert unsubscribe(ied, control, dataset).is_empty

    def test_no_empty_inputs_left_behind(self, station, find_control, find_ied):
        control, dataset = find_control(station)
        for name in ("IED2", "IED4"):
            apply_edit_batch(unsubscribe(find_ied(station, name), control, dataset), station)

        assert get_inputs(find_ied(station, "IED2")) == []
        remaining = get_extrefs(get_ln0_inputs(find_ied(station, "IED4")))
        assert [e.get("iedName") for e in remaining] == ["IED9"]

    def test_subscribe_then_unsubscribe_restores_ied(self, station, find_control, find_ied):
        """An unlinked IED returns to having no Inputs at all."""
        control, dataset = find_control(station)
        ied = find_ied(station, "IED3")

        apply_edit_batch(subscribe(ied, control, dataset), station)
        assert len(get_inputs(ied)) == 1
        apply_edit_batch(unsubscribe(ied, control, dataset), station)

        assert get_inputs(ied) == []
        assert classify_ieds(station, control, dataset).status_of("IED3").value == "none"

    def test_partial_scenario(self, station, find_control, find_ied):
        """Partial IED2: subscribe adds Do2, unsubscribe removes both and the Inputs."""
        control, dataset = find_control(station)
        ied = find_ied(station, "IED2")

        connect = subscribe(ied, control, dataset)
        assert [a.element.get("doName") for a in connect] == ["Do2"]
        apply_edit_batch(connect, station)

        disconnect = unsubscribe(ied, control, dataset)
        assert [a.element_identity for a in disconnect] == [
            "IED2>LD1>LLN0>Inputs>IED1 LD1/LLN0.Do1",
            "IED2>LD1>LLN0>Inputs>IED1 LD1/LLN0.Do2",
            "IED2>LD1>LLN0>Inputs",
        ]
        apply_edit_batch(disconnect, station)
        assert get_inputs(ied) == []
