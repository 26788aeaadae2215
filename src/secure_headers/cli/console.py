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
"""Shared Rich console for CLI output."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from secure_headers.web.builders import HeaderEntry

THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "header": "bold magenta",
    "dim": "dim",
})

console = Console(theme=THEME)


def print_header_table(entries: list[HeaderEntry]) -> None:
    table = Table(title="[header]Security Headers[/header]", border_style="dim", show_lines=True)
    table.add_column("Header", style="info", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for name, value in entries:
        table.add_row(name, Text(value))
    console.print(table)
