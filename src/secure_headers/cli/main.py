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
"""secure-headers CLI — inspect the header set a configuration produces."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape

from secure_headers.cli.console import console, print_header_table
from secure_headers.config.properties import SecureHeadersProperties
from secure_headers.core.config import Config
from secure_headers.kernel.exceptions import SecureHeadersException
from secure_headers.logging import StructlogAdapter
from secure_headers.web.composer import HeaderComposer, RequestContext
from secure_headers.web.validation import ConfigResolver

_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML or TOML file with a 'secure_headers' section.",
)
_profile_option = click.option(
    "--profile", "profiles", multiple=True, help="Profile overlay to merge (repeatable)."
)


def _load(config_path: Path | None, profiles: tuple[str, ...]) -> tuple[Config, SecureHeadersProperties]:
    if config_path is not None and not config_path.is_file():
        raise click.BadParameter(f"{config_path} does not exist", param_hint="--config")
    config = Config.from_file(config_path, active_profiles=list(profiles))
    StructlogAdapter().configure(config)
    try:
        return config, config.bind(SecureHeadersProperties)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.version_option(package_name="secure-headers")
def cli() -> None:
    """secure-headers — HTTP security response header composer."""


@cli.command("preview")
@_config_option
@_profile_option
@click.option("--nonce", default=None, help="Use this nonce instead of a random one.")
@click.option("--plain", is_flag=True, help="Print 'Name: value' lines instead of a table.")
def preview_command(config_path: Path | None, profiles: tuple[str, ...], nonce: str | None, plain: bool) -> None:
    """Print the headers composed for one request."""
    _, props = _load(config_path, profiles)
    composer = HeaderComposer(props.to_config())
    context = RequestContext(nonce=nonce) if nonce is not None else None
    try:
        entries = composer.compose(context)
    except SecureHeadersException as exc:
        raise click.ClickException(str(exc)) from exc

    if plain:
        for name, value in entries:
            click.echo(f"{name}: {value}")
    else:
        print_header_table(entries)


@cli.command("check")
@_config_option
@_profile_option
def check_command(config_path: Path | None, profiles: tuple[str, ...]) -> None:
    """Report configuration values that fall back to defaults."""
    config, props = _load(config_path, profiles)
    resolver = ConfigResolver()
    props.to_config(resolver)

    for source in config.loaded_sources:
        console.print(f"  [dim]loaded {escape(source)}[/dim]")
    if not resolver.issues:
        console.print("[success]No configuration issues found.[/success]")
        return
    for issue in resolver.issues:
        console.print(f"[warning]•[/warning] {escape(str(issue))}")
    raise SystemExit(1)
