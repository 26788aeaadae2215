# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Directive-list operations for Content-Security-Policy style values.

A policy is a ``;``-separated list of ``name value...`` clauses. Parsing is
lossless for anything the operator wrote: clauses that do not start with a
valid directive name are kept verbatim and re-emitted in place. Whitespace,
line breaks included, is collapsed to single spaces, which CSP treats as
equivalent.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from secure_headers.kernel.exceptions import DirectiveMergeError

NONCE_PLACEHOLDER = "nonce-proxy"

_NAME_RE = re.compile(r"[A-Za-z0-9-]+")
_PLACEHOLDER_RE = re.compile(r"'?" + re.escape(NONCE_PLACEHOLDER) + r"'?")


@dataclass(frozen=True)
class Directive:
    """One clause of a directive list.

    ``name`` is ``None`` for a clause that could not be parsed; ``value``
    then holds the whole clause.
    """

    name: str | None
    value: str = ""

    @property
    def well_formed(self) -> bool:
        return self.name is not None

    def serialize(self) -> str:
        if self.name is None or not self.value:
            return self.name or self.value
        return f"{self.name} {self.value}"


def parse_directives(text: str) -> list[Directive]:
    directives: list[Directive] = []
    for clause in text.split(";"):
        tokens = clause.split()
        if not tokens:
            continue
        if _NAME_RE.fullmatch(tokens[0]):
            directives.append(Directive(tokens[0], " ".join(tokens[1:])))
        else:
            directives.append(Directive(None, " ".join(tokens)))
    return directives


def find_directive(directives: Sequence[Directive], name: str) -> Directive | None:
    """Return the first directive called *name* (case-insensitive), if any."""
    wanted = name.lower()
    for directive in directives:
        if directive.name is not None and directive.name.lower() == wanted:
            return directive
    return None


def substitute_nonce(text: str, nonce: str) -> str:
    """Replace every ``nonce-proxy`` placeholder with ``'nonce-<nonce>'``.

    A placeholder the operator already quoted is replaced as a whole, so the
    result is always quoted exactly once.
    """
    return _PLACEHOLDER_RE.sub(lambda _: f"'nonce-{nonce}'", text)


def parse_with_nonce(text: str, nonce: str) -> list[Directive]:
    return parse_directives(substitute_nonce(text, nonce))


def require_well_formed(directives: Sequence[Directive]) -> None:
    """Raise :class:`DirectiveMergeError` if any clause failed to parse."""
    malformed = [d.value for d in directives if not d.well_formed]
    if malformed:
        raise DirectiveMergeError(
            "Policy contains clauses without a directive name",
            code="DIRECTIVE_MALFORMED",
            context={"clauses": malformed},
        )


def ensure_directive(directives: Sequence[Directive], name: str, value_if_missing: str) -> list[Directive]:
    """Append ``name value_if_missing`` unless *name* is already declared.

    A directive the operator declared always wins and is left untouched.
    """
    result = list(directives)
    if find_directive(result, name) is None:
        result.append(Directive(name, " ".join(value_if_missing.split())))
    return result


def serialize_directives(directives: Sequence[Directive]) -> str:
    return "; ".join(d.serialize() for d in directives)
