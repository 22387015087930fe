from pathlib import Path

import pytest

from domain.exceptions import InvalidMethod, InvalidPipeline, InvalidQuery
from domain.fields import FieldDescriptor
from domain.steps import GroupByStep, NavigateStep, SelectStep, WaitForStep
from infrastructure.query.base_loader import QueryLoadError
from infrastructure.query.yaml_loader import YamlQueryLoader


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "query.yaml"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_full_definition(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
url: http://example.test/list.html
method: POST
post_data: doggo
steps:
  - wait_for: body
    timeout_ms: 500
  - group_by: body > div
  - select:
      title: p
      link: {path: a, attr: href}
  - go: http://example.test/other.html
""",
    )

    query = YamlQueryLoader().load_from_file(path)

    assert query.steps == (
        NavigateStep(url="http://example.test/list.html", method="POST", post_data="doggo"),
        WaitForStep(selector="body", timeout_ms=500),
        GroupByStep(selector="body > div"),
        SelectStep(
            fields=(
                FieldDescriptor(name="title", selector="p"),
                FieldDescriptor(name="link", selector="a", attribute="href"),
            )
        ),
        NavigateStep(url="http://example.test/other.html"),
    )


def test_steps_are_optional(tmp_path: Path) -> None:
    query = YamlQueryLoader().load_from_file(_write(tmp_path, "url: http://example.test/\n"))

    assert query.method == "GET"
    assert len(query.steps) == 1


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(QueryLoadError, match="not found"):
        YamlQueryLoader().load_from_file(tmp_path / "nope.yaml")


def test_empty_file(tmp_path: Path) -> None:
    with pytest.raises(QueryLoadError, match="empty"):
        YamlQueryLoader().load_from_file(_write(tmp_path, ""))


def test_non_mapping_file(tmp_path: Path) -> None:
    with pytest.raises(QueryLoadError, match="invalid"):
        YamlQueryLoader().load_from_file(_write(tmp_path, "- a\n- b\n"))


def test_malformed_yaml(tmp_path: Path) -> None:
    with pytest.raises(QueryLoadError, match="not valid YAML"):
        YamlQueryLoader().load_from_file(_write(tmp_path, "url: [unclosed\n"))


def test_unknown_step(tmp_path: Path) -> None:
    path = _write(tmp_path, "url: http://example.test/\nsteps:\n  - click: button\n")

    with pytest.raises(QueryLoadError, match="step 0"):
        YamlQueryLoader().load_from_file(path)


def test_ambiguous_step(tmp_path: Path) -> None:
    with pytest.raises(QueryLoadError):
        YamlQueryLoader().load_from_dict(
            {"url": "http://example.test/", "steps": [{"go": "http://a.test/", "group_by": "div"}]}
        )


def test_steps_must_be_list() -> None:
    with pytest.raises(QueryLoadError, match="steps must be a list"):
        YamlQueryLoader().load_from_dict({"url": "http://example.test/", "steps": {"go": "x"}})


def test_construction_errors_surface_unchanged() -> None:
    loader = YamlQueryLoader()

    with pytest.raises(InvalidQuery):
        loader.load_from_dict({"steps": []})
    with pytest.raises(InvalidMethod, match="invalid method PUT"):
        loader.load_from_dict({"url": "http://example.test/", "method": "PUT"})
    with pytest.raises(InvalidPipeline):
        loader.load_from_dict(
            {"url": "http://example.test/", "steps": [{"select": {"a": "p"}}, {"select": {"b": "p"}}]}
        )


def test_malformed_wait_for_rejected_at_load(tmp_path: Path) -> None:
    path = _write(tmp_path, "url: http://example.test/\nsteps:\n  - wait_for: body\n    timeout_ms: soon\n")

    with pytest.raises(InvalidPipeline):
        YamlQueryLoader().load_from_file(path)
