import platform

import pytest
from pytest_mock import MockerFixture

import monitor_input_control as mic
from monitor_input_control import config

from .mocks.fake_method import FakeVCP

# define tests to skip
collect_ignore = []
if platform.system() != 'Windows':
    collect_ignore.append('test_windows.py')


@pytest.fixture(autouse=True)
def fake_method(monkeypatch: pytest.MonkeyPatch):
    FakeVCP.reset()
    monkeypatch.setattr(mic, '_OS_METHOD', FakeVCP)
    return FakeVCP


@pytest.fixture(autouse=True)
def state_file(monkeypatch: pytest.MonkeyPatch, tmp_path):
    path = str(tmp_path / 'state' / 'monitor_input_state.txt')
    monkeypatch.setattr(config, 'STATE_FILE', path)
    return path


@pytest.fixture(autouse=True)
def sleep(mocker: MockerFixture):
    '''patch sleep func so tests aren't slowed down'''
    return mocker.patch.object(mic.effects.time, 'sleep')
