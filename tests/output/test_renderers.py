"""Tests for operation-specific Rich renderers."""

from mosaicpods.output.renderers import render_quiet, render_result
from mosaicpods.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("build_definition", "UNKNOWN_POD_TYPE", "No such [type]"))
        assert "ERROR" in output
        assert "build_definition" in output
        assert "No such [type]" in output

    def test_problems_listed(self) -> None:
        result = _err("validate_schemas", "SCHEMA_INVALID", "2 problem(s)", problems=["a", "b"])
        output = render_result(result)
        assert "  - a" in output
        assert "  - b" in output

    def test_verbose_shows_detail(self) -> None:
        result = _err("show_pod_type", "UNKNOWN_POD_TYPE", "Bad", pod_type="nope")
        output = render_result(result, verbose=True)
        assert "detail" in output
        assert "pod_type: nope" in output

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="test"))


# ── Schema renderers ─────────────────────────────────────────────────


class TestSchemaRenderers:
    def test_type_table(self) -> None:
        result = _ok(
            "list_pod_types",
            count=2,
            items=[
                {"type": "hero_banner", "name": "Hero banner", "category": "Heroes", "fields": 7},
                {"type": "contact", "name": "Contact", "category": None, "fields": 3},
            ],
        )
        output = render_result(result)
        assert "hero_banner" in output
        assert "Hero banner" in output
        assert "2 pod types" in output

    def test_type_detail_tree(self) -> None:
        result = _ok(
            "show_pod_type",
            type="card_grid",
            name="Card grid",
            fields=[
                {
                    "name": "cards",
                    "type": "array",
                    "required": True,
                    "item_schema": {"photo": {"name": "photo", "type": "image"}},
                    "schema": {},
                }
            ],
        )
        output = render_result(result)
        assert "OK" in output
        assert "card_grid" in output
        assert "cards array *" in output
        assert "photo image" in output


# ── Definition renderers ─────────────────────────────────────────────


class TestDefinitionRenderers:
    def test_definition_json(self) -> None:
        result = _ok(
            "build_definition",
            pod_type="hero_banner",
            definition={"title": "Hi [there]"},
            attachment_keys=["k1"],
        )
        output = render_result(result)
        assert '"title": "Hi [there]"' in output
        assert "attachment_keys" not in output
        assert "attachment_keys" in render_result(result, verbose=True)

    def test_preview_html_unwrapped(self) -> None:
        html = '<div class="pod-hero">' + "x" * 300 + "</div>"
        output = render_result(_ok("preview_pod", html=html, template=None))
        assert output == html

    def test_preview_verbose_names_placeholder(self) -> None:
        output = render_result(_ok("preview_pod", html="<p></p>", template=None), verbose=True)
        assert "<placeholder>" in output

    def test_image(self) -> None:
        result = _ok("resolve_image", field="logo", url="/admin/image_attachments/k1/original")
        output = render_result(result)
        assert "url: /admin/image_attachments/k1/original" in output

    def test_scaffold(self) -> None:
        result = _ok(
            "scaffold_templates",
            directory="templates/pods",
            created=["templates/pods/a.html.j2"],
            skipped=["templates/pods/b.html.j2"],
        )
        output = render_result(result)
        assert "create  templates/pods/a.html.j2" in output
        assert "skip    templates/pods/b.html.j2" in output

    def test_generic_fallback(self) -> None:
        output = render_result(_ok("reload_schemas", count=4))
        assert "reload_schemas" in output
        assert "count: 4" in output


# ── Quiet mode ───────────────────────────────────────────────────────


class TestQuiet:
    def test_list_prints_keys(self) -> None:
        result = _ok("list_pod_types", items=[{"type": "a"}, {"type": "b"}])
        assert render_quiet(result) == "a\nb"

    def test_attachment_keys(self) -> None:
        result = _ok("scan_attachments", items=[{"attachment_key": "k1"}])
        assert render_quiet(result) == "k1"

    def test_image_url(self) -> None:
        assert render_quiet(_ok("resolve_image", url="/x")) == "/x"
        assert render_quiet(_ok("resolve_image", url=None)) == ""

    def test_ok_fallback(self) -> None:
        assert render_quiet(_ok("validate_schemas", count=3)) == "OK: validate_schemas"

    def test_error(self) -> None:
        assert render_quiet(_err("x", "C", "boom")) == "ERROR: x — boom"
