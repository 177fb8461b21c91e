from __future__ import annotations

from parse.nodes import LiquidRawTag, LiquidTag, SourceSpan
from rules.base import CheckMeta, Severity
from rules.config import PageCheckConfig
from rules.engine import CheckContext, NodeVisitor, run_checks


class _RecordingCheck:
    meta = CheckMeta(
        code="PaginationSize",
        name="Records visits",
        description="Test double",
        url="https://example.invalid",
        severity=Severity.INFO,
    )

    def __init__(self) -> None:
        self.events: list[str] = []

    def create(self, context: CheckContext) -> NodeVisitor:
        def liquid_tag(node: LiquidTag) -> None:
            self.events.append(f"tag:{node.name}")

        def liquid_raw_tag(node: LiquidRawTag) -> None:
            self.events.append(f"raw:{node.name}")

        def on_code_path_end() -> None:
            self.events.append("end")
            context.report("done", SourceSpan(0, 1))

        return NodeVisitor(
            liquid_tag=liquid_tag,
            liquid_raw_tag=liquid_raw_tag,
            on_code_path_end=on_code_path_end,
        )


def test_nodes_are_dispatched_in_document_order_before_end() -> None:
    check = _RecordingCheck()
    source = "a{% if x %}b{% schema %}{}{% endschema %}{% endif %}"

    diagnostics = run_checks(source, [check], PageCheckConfig(), file="x.liquid")

    assert check.events == ["tag:if", "raw:schema", "tag:endif", "end"]
    assert len(diagnostics) == 1
    assert diagnostics[0].file == "x.liquid"
    assert diagnostics[0].severity is Severity.INFO
    assert diagnostics[0].to_dict() == {
        "check": "PaginationSize",
        "message": "done",
        "severity": "info",
        "file": "x.liquid",
        "start_index": 0,
        "end_index": 1,
    }


def test_partial_visitors_are_allowed() -> None:
    class _EndOnly(_RecordingCheck):
        def create(self, context: CheckContext) -> NodeVisitor:
            return NodeVisitor(on_code_path_end=lambda: self.events.append("end"))

    check = _EndOnly()

    assert run_checks("{% paginate c by 5 %}", [check], PageCheckConfig()) == []
    assert check.events == ["end"]


def test_disabled_check_is_never_created() -> None:
    check = _RecordingCheck()
    config = PageCheckConfig.model_validate(
        {"checks": {"PaginationSize": {"enabled": False}}}
    )

    assert run_checks("{% paginate c by 5 %}", [check], config) == []
    assert check.events == []
