#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

import sys
import textwrap
from pathlib import Path

import pytest

from typewire.cli.main import CliManager

SAMPLE_MODULE = '''
from dataclasses import dataclass
from enum import Enum

from typewire import Int32, derive_encode


@derive_encode(transparent=True)
class UserId(tuple[Int32]):
    pass


@derive_encode(repr='int16')
class Priority(Enum):
    Low = 1
    High = 2


@derive_encode
@dataclass
class Ticket:
    owner: UserId
    priority: Priority
'''

BROKEN_MODULE = '''
from typewire import derive_encode


@derive_encode
class Nothing(tuple[()]):
    pass
'''


def _write_module(tmp_path: Path, name: str, source: str) -> None:
    (tmp_path / f'{name}.py').write_text(textwrap.dedent(source))


@pytest.fixture
def run_cli(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.syspath_prepend(str(tmp_path))

    def _run(*args: str) -> int:
        monkeypatch.setattr(sys, 'argv', ['typewire-cli', *args])
        return CliManager().execute_from_command_line()

    return _run


def test_help(run_cli, capsys) -> None:
    assert run_cli('help') == 0
    assert 'check' in capsys.readouterr().out


def test_unknown_command(run_cli, capsys) -> None:
    assert run_cli('frobnicate') == -1
    assert 'Unknown command: "frobnicate"' in capsys.readouterr().out


def test_check(tmp_path, run_cli, capsys) -> None:
    _write_module(tmp_path, 'typewire_cli_sample', SAMPLE_MODULE)
    assert run_cli('check', 'typewire_cli_sample', '--disable-logs') == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        'UserId: Transparent (postgres, mysql)',
        'Priority: WeakEnum (postgres, mysql)',
        'Ticket: Record (postgres)',
    ]


def test_check_reports_failures(tmp_path, run_cli, capsys) -> None:
    _write_module(tmp_path, 'typewire_cli_broken', BROKEN_MODULE)
    assert run_cli('check', 'typewire_cli_broken', '--disable-logs') == 1
    out = capsys.readouterr().out
    assert 'error: Nothing: structs with zero or more than one unnamed field are not supported' in out


def test_check_without_derived_types(tmp_path, run_cli, capsys) -> None:
    _write_module(tmp_path, 'typewire_cli_empty', 'VALUE = 1\n')
    assert run_cli('check', 'typewire_cli_empty', '--disable-logs') == 0
    assert 'no derived types found' in capsys.readouterr().out
