# tools/core/variable_resolver.py

import json
from collections.abc import Mapping
from typing import Any, Optional, Sequence, Tuple

from core.exceptions import VariableResolutionError
from common.logger import LoggerFactory, LogLevel
from schemas.core.execution_record import ExecutionRecord, RecordEntry
from utils.mock_directives import MockDirectiveExpander
from utils.reference_parser import Reference, find_references

_MISSING = object()


def walk_path(value: Any, segments: Sequence[str], case_insensitive: bool = False) -> Any:
    """
    Follow ``segments`` through nested mappings and lists.

    Returns the module-level ``_MISSING`` sentinel as soon as a segment
    does not exist. ``case_insensitive`` applies to the first segment only,
    for header names.
    """
    for index, segment in enumerate(segments):
        if isinstance(value, Mapping):
            if segment in value:
                value = value[segment]
                continue
            if case_insensitive and index == 0:
                lowered = {str(k).lower(): v for k, v in value.items()}
                if segment.lower() in lowered:
                    value = lowered[segment.lower()]
                    continue
            return _MISSING
        if isinstance(value, list) and segment.isdigit() and int(segment) < len(value):
            value = value[int(segment)]
            continue
        return _MISSING
    return value


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)


class VariableResolver:
    """
    Expands request templates before a test case is sent.

    Every string leaf goes through two passes: ``$.<key>.<params|body|header>.<path>``
    references are replaced with data captured earlier in the run, then
    ``@directive`` placeholders are replaced with generated data. A result
    starting with ``{`` or ``[`` is parsed as JSON when possible.

    Resolution is best-effort: an unknown key or a missing path keeps the
    original reference text. With ``strict=True`` a
    :class:`VariableResolutionError` is raised instead.
    """

    def __init__(
        self,
        strict: bool = False,
        mock_expander: Optional[MockDirectiveExpander] = None,
        verbose: bool = False,
    ):
        self.strict = strict
        self.mock_expander = mock_expander or MockDirectiveExpander()
        self.logger = LoggerFactory.get_logger(
            name="tool.variable_resolver",
            level=LogLevel.DEBUG if verbose else LogLevel.INFO,
        )

    def resolve(self, data: Any, record: ExecutionRecord) -> Any:
        """Resolve every string leaf of a nested dict/list/str value."""
        if isinstance(data, str):
            return self.resolve_expression(data, record)
        if isinstance(data, list):
            return [self.resolve(item, record) for item in data]
        if isinstance(data, Mapping):
            return {key: self.resolve(value, record) for key, value in data.items()}
        return data

    def resolve_expression(self, expression: str, record: ExecutionRecord) -> Any:
        resolved: Any = self._substitute_references(expression, record)
        if not isinstance(resolved, str):
            return resolved

        if "@" in resolved:
            try:
                resolved = self.mock_expander.expand(resolved)
            except Exception as e:
                if self.strict:
                    raise VariableResolutionError(expression, f"mock directive failed: {e}") from e
                self.logger.warning(
                    f"Mock directive expansion failed: {e}", expression=expression
                )
            if not isinstance(resolved, str):
                return resolved

        if resolved.startswith(("{", "[")):
            try:
                return json.loads(resolved)
            except ValueError:
                pass
        return resolved

    def _substitute_references(self, expression: str, record: ExecutionRecord) -> Any:
        references = find_references(expression)
        if not references:
            return expression

        if len(references) == 1 and references[0].spans(expression):
            found, value = self._lookup(references[0], record)
            return value if found else expression

        parts = []
        cursor = 0
        for reference in references:
            parts.append(expression[cursor : reference.start])
            found, value = self._lookup(reference, record)
            parts.append(_as_text(value) if found else reference.text)
            cursor = reference.end
        parts.append(expression[cursor:])
        return "".join(parts)

    def _lookup(self, reference: Reference, record: ExecutionRecord) -> Tuple[bool, Any]:
        entry = record.find(reference.key)
        if entry is None:
            if self.strict:
                raise VariableResolutionError(reference.text, f"no record for key '{reference.key}'")
            self.logger.warning(
                "Variable record not found", match=reference.text, key=reference.key
            )
            return False, None

        value = walk_path(
            self._source_of(entry, reference.source),
            reference.path,
            case_insensitive=reference.source == "header",
        )
        if value is _MISSING:
            if self.strict:
                raise VariableResolutionError(
                    reference.text, f"path '{'.'.join(reference.path)}' not found"
                )
            self.logger.debug(
                "Variable path not found, keeping original text",
                match=reference.text,
            )
            return False, None
        return True, value

    @staticmethod
    def _source_of(entry: RecordEntry, source: str) -> Any:
        if source == "params":
            return entry.request.query or {}
        if entry.response is None:
            return {}
        if source == "body":
            return entry.response.body if entry.response.body is not None else {}
        return entry.response.headers or {}
