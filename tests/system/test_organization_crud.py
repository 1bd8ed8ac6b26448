"""组织子树递归检索（CRUD 层）的测试。"""

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session

from app.packages.system.core.config import OrganizationTreeConfig
from app.packages.system.core.exceptions import (
    ConnectionFailure,
    CycleDetected,
    DecodeFailure,
    DepthExceeded,
    QueryFailure,
    RetrievalError,
)
from app.packages.system.crud.organizations import CRUDOrganization
from app.packages.system.models.organization import OrganizationRecord
from app.packages.system.services.organization_service import OrganizationService

ACME_ROWS = [
    ("A", "Acme", None),
    ("B", "Acme-West", "A"),
    ("C", "Acme-East", "A"),
    ("D", "Acme-West-1", "B"),
]


def _ids(records):
    return sorted(record.id for record in records)


def test_fetch_subtree_returns_active_closure(db_session_fixture, org_rows):
    org_rows(
        *ACME_ROWS,
        ("E", "Acme-North", "A", "0"),
        ("F", "Acme-North-1", "E"),  # 父节点无效，整支被剪除
        ("Z", "Zenith", None),
        ("Z1", "Zenith-1", "Z"),
    )
    records = CRUDOrganization().fetch_subtree(db_session_fixture, "A")

    assert _ids(records) == ["A", "B", "C", "D"]
    assert OrganizationRecord("D", "Acme-West-1", "B") in records
    assert OrganizationRecord("A", "Acme", None) in records


def test_fetch_inner_subtree(db_session_fixture, org_rows):
    org_rows(*ACME_ROWS)
    records = CRUDOrganization().fetch_subtree(db_session_fixture, "B")
    assert _ids(records) == ["B", "D"]


def test_unknown_or_inactive_root_returns_empty(db_session_fixture, org_rows):
    org_rows(*ACME_ROWS, ("Q", "Quiet", None, "0"), ("Q1", "Quiet-1", "Q"))
    crud = CRUDOrganization()

    assert crud.fetch_subtree(db_session_fixture, "missing") == []
    assert crud.fetch_subtree(db_session_fixture, "Q") == []


def test_custom_active_status(db_session_fixture, org_rows):
    org_rows(("A", "Acme", None, "Y"), ("B", "Acme-West", "A", "Y"), ("C", "Acme-East", "A", "1"))
    crud = CRUDOrganization(OrganizationTreeConfig(active_status="Y"))

    assert _ids(crud.fetch_subtree(db_session_fixture, "A")) == ["A", "B"]
    assert [org.org_id for org in crud.get_multi(db_session_fixture)] == ["A", "B"]


def test_cyclic_rows_terminate_in_database(db_session_fixture, org_rows):
    org_rows(("A", "Alpha", "B"), ("B", "Beta", "A"))
    records = CRUDOrganization().fetch_subtree(db_session_fixture, "A")
    assert _ids(records) == ["A", "B"]

    with pytest.raises(CycleDetected):
        OrganizationService().get_subtree(db_session_fixture, "A")


def test_service_depth_limit_from_config(db_session_fixture, org_rows):
    org_rows(("L0", "L0", None), ("L1", "L1", "L0"), ("L2", "L2", "L1"), ("L3", "L3", "L2"))
    shallow = OrganizationService(OrganizationTreeConfig(max_depth=2))

    with pytest.raises(DepthExceeded):
        shallow.get_subtree(db_session_fixture, "L0")
    assert shallow.render_subtree(db_session_fixture, "L1") == (
        '{"org_id":"L1","org_name":"L1","org_childs":[{"org_id":"L2","org_name":"L2",'
        '"org_childs":[{"org_id":"L3","org_name":"L3"}]}]}'
    )


def test_empty_root_id_is_rejected(db_session_fixture):
    with pytest.raises(ValueError):
        CRUDOrganization().fetch_subtree(db_session_fixture, "")


def test_connection_failure(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'org.db'}")
    with Session(engine) as session:
        with pytest.raises(ConnectionFailure) as exc_info:
            CRUDOrganization().fetch_subtree(session, "A")
    engine.dispose()

    assert isinstance(exc_info.value, RetrievalError)
    assert exc_info.value.status_code == 503


def test_query_failure_when_table_is_missing(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    with Session(engine) as session:
        with pytest.raises(QueryFailure):
            CRUDOrganization().fetch_subtree(session, "A")
    engine.dispose()


def test_decode_failure_on_null_name(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'loose.db'}")
    with engine.begin() as conn:
        conn.execute(
            text(
                "CREATE TABLE organization ("
                "org_id TEXT, org_name TEXT, org_parent_id TEXT, org_status TEXT)"
            )
        )
        conn.execute(text("INSERT INTO organization VALUES ('A', NULL, NULL, '1')"))

    with Session(engine) as session:
        with pytest.raises(DecodeFailure) as exc_info:
            CRUDOrganization().fetch_subtree(session, "A")
    engine.dispose()

    assert exc_info.value.org_id == "A"


def test_decode_row_rules():
    assert CRUDOrganization.decode_row(("A", "Acme", None)) == OrganizationRecord("A", "Acme", None)
    assert CRUDOrganization.decode_row((7, "Seven", 3)) == OrganizationRecord("7", "Seven", "3")

    with pytest.raises(DecodeFailure):
        CRUDOrganization.decode_row(("A", "Acme"))
    with pytest.raises(DecodeFailure):
        CRUDOrganization.decode_row(("  ", "Blank", None))
    with pytest.raises(DecodeFailure):
        CRUDOrganization.decode_row((None, "No id", None))
