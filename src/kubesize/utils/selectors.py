# src/kubesize/utils/selectors.py
"""
Field selector construction for pod listings.

Selectors are validated with the same term rules the API server applies, so a
malformed selector fails locally instead of being sent.
"""

from typing import List, Tuple

from ..core.exceptions import SelectorError

POD_SUCCEEDED = "Succeeded"
POD_FAILED = "Failed"

# Longest operators first so "!=" and "==" are not read as "=".
_OPERATORS = ("!=", "==", "=")
_ESCAPABLE = ("\\", ",", "=")


def _split_terms(selector: str) -> List[str]:
    terms = []
    current = []
    escaped = False
    for char in selector:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            current.append(char)
            escaped = True
        elif char == ",":
            terms.append("".join(current))
            current = []
        else:
            current.append(char)
    terms.append("".join(current))
    return terms


def _unescape_value(value: str, selector: str) -> str:
    out = []
    escaped = False
    for char in value:
        if escaped:
            if char not in _ESCAPABLE:
                raise SelectorError(f"invalid field selector {selector!r}: invalid escape sequence '\\{char}'")
            out.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in (",", "="):
            raise SelectorError(f"invalid field selector {selector!r}: unescaped {char!r} in value {value!r}")
        else:
            out.append(char)
    if escaped:
        raise SelectorError(f"invalid field selector {selector!r}: trailing escape in value {value!r}")
    return "".join(out)


def _split_term(term: str, selector: str) -> Tuple[str, str, str]:
    for index, char in enumerate(term):
        for operator in _OPERATORS:
            if term.startswith(operator, index):
                key = term[:index]
                if not key:
                    raise SelectorError(f"invalid field selector {selector!r}: missing key in {term!r}")
                value = _unescape_value(term[index + len(operator) :], selector)
                return key, operator, value
    raise SelectorError(f"invalid field selector {selector!r}: can't understand {term!r}")


def parse_field_selector(selector: str) -> List[Tuple[str, str, str]]:
    """
    Parses a field selector into ``(key, operator, value)`` terms.

    An empty selector selects everything and yields no terms.
    """
    if not selector:
        return []
    return [_split_term(term, selector) for term in _split_terms(selector)]


def build_field_selector(*terms: str) -> str:
    """Joins selector terms and validates the result."""
    selector = ",".join(terms)
    parse_field_selector(selector)
    return selector


def non_terminated_pods_selector() -> str:
    return build_field_selector(f"status.phase!={POD_SUCCEEDED}", f"status.phase!={POD_FAILED}")


def node_pods_selector(node_name: str, non_terminated: bool = False) -> str:
    """Selects the pods bound to ``node_name``, optionally dropping terminated ones."""
    terms = [f"spec.nodeName={node_name}"]
    if non_terminated:
        terms += [f"status.phase!={POD_SUCCEEDED}", f"status.phase!={POD_FAILED}"]
    return build_field_selector(*terms)
