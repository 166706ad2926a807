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
"""flydao CLI — generate DAO implementations from marked declarations."""

from __future__ import annotations

import click


@click.group()
@click.version_option(package_name="flydao")
def cli() -> None:
    """flydao — DAO implementation generator."""


from flydao.cli.generate import generate_command, inspect_command  # noqa: E402

cli.add_command(generate_command, name="generate")
cli.add_command(inspect_command, name="inspect")
