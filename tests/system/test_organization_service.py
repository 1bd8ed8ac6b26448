"""组织树服务层的测试：检索结果经组装后的输出与日志。"""

import logging

import pytest

from app.packages.system.models.organization import OrganizationRecord as Rec
from app.packages.system.services import organization_service as service_module
from app.packages.system.services.organization_service import OrganizationService


class StaticRecordsCrud:
    """按给定顺序返回固定记录的检索替身。"""

    def __init__(self, records):
        self.records = records
        self.calls = []

    def fetch_subtree(self, db, root_id):
        self.calls.append(root_id)
        return list(self.records)


def _reaches_handler(logger, handler):
    current = logger
    while current is not None:
        if handler in current.handlers:
            return True
        if not current.propagate:
            return False
        current = current.parent
    return False


@pytest.fixture()
def service_warnings(caplog):
    """直接挂载到服务 logger，不依赖向 root 的传播。"""
    service_logger = logging.getLogger(service_module.__name__)
    attached = not _reaches_handler(service_logger, caplog.handler)
    if attached:
        service_logger.addHandler(caplog.handler)
    caplog.set_level(logging.WARNING, logger=service_module.__name__)
    try:
        yield caplog
    finally:
        if attached:
            service_logger.removeHandler(caplog.handler)


def test_duplicate_ids_are_logged_and_last_record_wins(service_warnings):
    crud = StaticRecordsCrud(
        [
            Rec("A", "Acme", None),
            Rec("B", "Acme-West", "A"),
            Rec("C", "Acme-East", "A"),
            Rec("B", "Acme-West-Renamed", "A"),
            Rec("C", "Acme-East-Renamed", "A"),
        ]
    )
    service = OrganizationService(crud=crud)

    tree = service.get_subtree(None, "A")

    assert crud.calls == ["A"]
    assert [child.name for child in tree.children] == ["Acme-West-Renamed", "Acme-East-Renamed"]

    warnings = [r for r in service_warnings.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    message = warnings[0].getMessage()
    assert "org_tree.duplicate_ids" in message
    assert "root_id=A" in message
    assert "ids=B,C" in message


def test_no_duplicate_warning_for_clean_records(service_warnings):
    crud = StaticRecordsCrud([Rec("A", "Acme", None), Rec("B", "Acme-West", "A")])

    rendered = OrganizationService(crud=crud).render_subtree(None, "A")

    assert rendered == '{"org_id":"A","org_name":"Acme","org_childs":[{"org_id":"B","org_name":"Acme-West"}]}'
    assert not [r for r in service_warnings.records if "duplicate_ids" in r.getMessage()]
