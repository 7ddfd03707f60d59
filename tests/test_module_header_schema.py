"""
Summary: Validate Summary/Why header docstring schema for selected modules.
Why: Prevent regression to inconsistent header formats across touched files.
"""

from __future__ import annotations

from pathlib import Path

import pytest

HEADER_OPEN: str = '"""'
HEADER_CLOSE: str = '"""'
SUMMARY_PREFIX: str = "Summary: "
WHY_PREFIX: str = "Why: "
SUMMARY_OFFSET: int = 1
WHY_OFFSET: int = 2
CLOSE_OFFSET: int = 3
HEADER_LENGTH: int = 4

TARGET_MODULES: tuple[Path, ...] = (
    Path("src/classical_tagger/exceptions.py"),
    Path("src/classical_tagger/features/intake/usecases/descriptor.py"),
    Path("src/classical_tagger/features/intake/usecases/extraction/tag_reader.py"),
    Path("src/classical_tagger/features/intake/usecases/loader.py"),
    Path("src/classical_tagger/features/validation/domain/__init__.py"),
    Path("src/classical_tagger/features/validation/domain/models.py"),
    Path("src/classical_tagger/features/validation/domain/names.py"),
    Path("src/classical_tagger/features/validation/domain/result.py"),
    Path("src/classical_tagger/features/validation/domain/rule.py"),
    Path("src/classical_tagger/features/validation/domain/rules/__init__.py"),
    Path("src/classical_tagger/features/validation/domain/rules/accuracy.py"),
    Path("src/classical_tagger/features/validation/domain/rules/artists.py"),
    Path("src/classical_tagger/features/validation/domain/rules/composers.py"),
    Path("src/classical_tagger/features/validation/domain/rules/dates.py"),
    Path("src/classical_tagger/features/validation/domain/rules/formatting.py"),
    Path("src/classical_tagger/features/validation/domain/rules/numbering.py"),
    Path("src/classical_tagger/features/validation/domain/rules/structure.py"),
    Path("src/classical_tagger/features/validation/domain/text.py"),
    Path("src/classical_tagger/features/validation/usecases/engine.py"),
    Path("src/classical_tagger/features/validation/usecases/registry.py"),
    Path("tests/features/intake/test_tag_reader.py"),
    Path("tests/features/validation/domain/test_names.py"),
    Path("tests/features/validation/domain/rules/test_structure_rules.py"),
    Path("tests/features/validation/domain/rules/test_accuracy_rules.py"),
    Path("tests/features/validation/usecases/test_engine.py"),
)


@pytest.mark.parametrize("module_path", TARGET_MODULES, ids=lambda path: str(path))
def test_module_headers_follow_summary_why_schema(module_path: Path) -> None:
    """Ensure module header docstring uses Summary and Why lines."""

    content_lines = module_path.read_text(encoding="utf-8").splitlines()
    start_index = next(
        (index for index, line in enumerate(content_lines) if line.strip()),
        None,
    )
    assert start_index is not None, f"{module_path} must not be empty"

    assert len(content_lines) >= start_index + HEADER_LENGTH, (
        f"{module_path} must provide at least {HEADER_LENGTH} header lines"
    )

    opening_line = content_lines[start_index].strip()
    assert opening_line == HEADER_OPEN, f"{module_path} must start with header docstring"

    summary_line = content_lines[start_index + SUMMARY_OFFSET]
    why_line = content_lines[start_index + WHY_OFFSET]
    closing_line = content_lines[start_index + CLOSE_OFFSET].strip()

    assert summary_line.startswith(SUMMARY_PREFIX), (
        f"{module_path} summary line must begin with '{SUMMARY_PREFIX}'"
    )
    assert why_line.startswith(WHY_PREFIX), (
        f"{module_path} why line must begin with '{WHY_PREFIX}'"
    )
    assert closing_line == HEADER_CLOSE, (
        f"{module_path} header must close with triple quotes"
    )

    assert summary_line.removeprefix(SUMMARY_PREFIX).strip(), (
        f"{module_path} summary text cannot be empty"
    )
    assert why_line.removeprefix(WHY_PREFIX).strip(), (
        f"{module_path} why text cannot be empty"
    )
