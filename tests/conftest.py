"""
Shared fixtures for the subscription tests.

The station document has one publisher and several subscribers:

- IED1: publisher, GSEControl GCB1 on DataSet GooseDataSet1 (Do1, Do2)
- IED2: one Inputs linking Do1 only              -> partially subscribed
- IED3: LN0 without Inputs                       -> not subscribed
- IED4: Inputs linking Do1 and Do2, plus a link
        to another publisher                     -> subscribed
- IED5: no LN0 at all                            -> not subscribed
"""

import os
import tempfile

# Keep test logs out of the home directory; must run before package imports
os.environ.setdefault("GOOSE_SUBSCRIBER_LOG_DIR", tempfile.mkdtemp(prefix="goose-log-"))

import pytest

from core import iter_tag
from utils.scl_utils import get_dataset, get_ieds, parse_scl

PUBLISHER_XML = """
  <IED name="IED1">
    <AccessPoint name="AP1"><Server><LDevice inst="LD1">
      <LN0 lnClass="LLN0" inst="">
        <DataSet name="GooseDataSet1">
          <FCDA ldInst="LD1" lnClass="LLN0" doName="Do1" fc="ST"/>
          <FCDA ldInst="LD1" lnClass="LLN0" doName="Do2" fc="ST"/>
        </DataSet>
        <DataSet name="EmptyDataSet"/>
        <GSEControl name="GCB1" datSet="GooseDataSet1"/>
        <GSEControl name="GCB2" datSet="EmptyDataSet"/>
        <GSEControl name="GCB3"/>
      </LN0>
    </LDevice></Server></AccessPoint>
  </IED>
"""

SUBSCRIBERS_XML = """
  <IED name="IED2">
    <AccessPoint name="AP1"><Server><LDevice inst="LD1">
      <LN0 lnClass="LLN0" inst="">
        <Inputs>
          <ExtRef iedName="IED1" serviceType="GOOSE" ldInst="LD1" lnClass="LLN0"
                  lnInst="" prefix="" doName="Do1" daName=""/>
        </Inputs>
      </LN0>
    </LDevice></Server></AccessPoint>
  </IED>
  <IED name="IED3">
    <AccessPoint name="AP1"><Server><LDevice inst="LD1">
      <LN0 lnClass="LLN0" inst=""/>
      <LN prefix="" lnClass="XCBR" inst="1"/>
    </LDevice></Server></AccessPoint>
  </IED>
  <IED name="IED4">
    <AccessPoint name="AP1"><Server><LDevice inst="LD1">
      <LN0 lnClass="LLN0" inst="">
        <Inputs>
          <ExtRef iedName="IED1" ldInst="LD1" lnClass="LLN0" doName="Do1"/>
          <ExtRef iedName="IED1" ldInst="LD1" lnClass="LLN0" doName="Do2"/>
          <ExtRef iedName="IED9" ldInst="LD1" lnClass="LLN0" doName="Do1"/>
        </Inputs>
      </LN0>
    </LDevice></Server></AccessPoint>
  </IED>
  <IED name="IED5">
    <AccessPoint name="AP1"><Server><LDevice inst="LD1"/></Server></AccessPoint>
  </IED>
"""


def build_scl(ieds_xml: str, namespace: bool = True):
    """Parse an SCL document holding the publisher IED1 and the given IEDs."""
    xmlns = ' xmlns="http://www.iec.ch/61850/2003/SCL"' if namespace else ""
    content = f'<?xml version="1.0" encoding="UTF-8"?>\n<SCL{xmlns}>{PUBLISHER_XML}{ieds_xml}</SCL>'
    return parse_scl(content.encode("utf-8"))


@pytest.fixture
def scl_factory():
    """Factory building documents with the publisher IED1 and custom subscribers."""
    return build_scl


@pytest.fixture
def station():
    """The station document described in the module docstring."""
    return build_scl(SUBSCRIBERS_XML)


@pytest.fixture
def find_ied():
    """Look up a top-level IED by name."""
    def _find(root, name):
        return next(ied for ied in get_ieds(root) if ied.get("name") == name)
    return _find


@pytest.fixture
def find_control():
    """Look up a GSEControl by name and return it with its DataSet."""
    def _find(root, name="GCB1"):
        control = next(c for c in iter_tag(root, "GSEControl") if c.get("name") == name)
        return control, get_dataset(control)
    return _find


@pytest.fixture
def bare_station():
    """The station document without the SCL namespace."""
    return build_scl(SUBSCRIBERS_XML, namespace=False)
