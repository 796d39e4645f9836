import os
from unittest.mock import Mock

import pytest
from pytest_mock import MockerFixture

import monitor_input_control as mic
from monitor_input_control import config
from monitor_input_control.helpers import (BRIGHTNESS, CONTRAST, INPUT_SOURCE,
                                           POWER_CONTROL, VCP_SETTINGS)

from .mocks.fake_method import FakeVCP


def read_state(path):
    with open(path) as f:
        return f.read()


class TestToggle:
    def test_defaults(self, state_file):
        assert mic.toggle() is True
        assert FakeVCP.writes[-1] == (1020, INPUT_SOURCE, 0x0F)
        assert read_state(state_file) == 'DISPLAYPORT'

        assert mic.toggle() is True
        assert FakeVCP.writes[-1] == (1020, INPUT_SOURCE, 0x11)
        assert read_state(state_file) == 'HDMI1'

    def test_kwargs(self, tmp_path):
        path = str(tmp_path / 'custom.txt')
        assert mic.toggle(mode='FIRST', port_1='HDMI2', port_2='USB-C', state_file=path) is True
        assert FakeVCP.writes[-1] == (1010, INPUT_SOURCE, 0x12)
        assert read_state(path) == 'HDMI2'

    def test_config_globals(self, monkeypatch: pytest.MonkeyPatch, state_file):
        notify = Mock()
        monkeypatch.setattr(config, 'TARGET_MONITOR_MODE', 'NAME:dell')
        monkeypatch.setattr(config, 'PORT_1', 'VGA')
        monkeypatch.setattr(config, 'PUBLIC_CHANGE_MESSAGE', True)
        monkeypatch.setattr(config, 'NOTIFY', notify)
        assert mic.toggle() is True
        assert FakeVCP.writes[-1] == (1010, INPUT_SOURCE, 0x01)
        notify.assert_called_once_with('Monitor switched to VGA')

    def test_invalid_port(self, state_file):
        assert mic.toggle(port_2='HDMI7') is False
        assert FakeVCP.opened == [] and FakeVCP.writes == []
        assert not os.path.exists(state_file)

    def test_silent_failure(self, state_file):
        FakeVCP.rejected_writes.add((INPUT_SOURCE, 0x0F))
        assert mic.toggle() is True
        assert not os.path.exists(state_file)

    def test_no_displays(self):
        FakeVCP.reset([])
        assert mic.toggle() is False

    def test_display_not_found(self):
        assert mic.toggle(mode='NAME:Samsung') is False
        assert FakeVCP.writes == []

    def test_invalid_mode(self):
        assert mic.toggle(mode='SECOND') is False
        assert FakeVCP.opened == []

    def test_unsupported_platform(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(mic, '_OS_METHOD', None)
        assert mic.toggle() is False


class TestGetSetting:
    def test_default_target(self):
        FakeVCP.set_value(102, BRIGHTNESS, 35)
        assert mic.get_setting('BRIGHTNESS') == 35

    def test_name_normalised(self):
        FakeVCP.set_value(101, VCP_SETTINGS['RED_GAIN'].code, 12)
        assert mic.get_setting('red gain', mode='NAME:dell') == 12
        assert mic.get_setting('Red-Gain', mode='FIRST') == 12

    def test_unsupported_code(self):
        FakeVCP.unsupported.add(CONTRAST)
        assert mic.get_setting('CONTRAST') == mic.UNSUPPORTED

    @pytest.mark.parametrize('name', ['SHARPNESS', '', None])
    def test_invalid_name(self, name):
        assert mic.get_setting(name) == mic.UNSUPPORTED
        assert FakeVCP.opened == []

    def test_no_match(self):
        assert mic.get_setting('BRIGHTNESS', mode='NAME:Samsung') == mic.UNSUPPORTED


class TestSetSetting:
    @pytest.mark.parametrize('value,written', [(150, 100), (-4, 0), ('42', 42), (33.9, 33)])
    def test_percentage_clamped(self, value, written):
        assert mic.set_setting('BRIGHTNESS', value) is True
        assert FakeVCP.writes[-1] == (1020, BRIGHTNESS, written)

    @pytest.mark.parametrize('value,written', [('HDMI 2', 0x12), ('dp', 0x0F), (0x11, 0x11), ('17', 0x11)])
    def test_input_source(self, value, written):
        assert mic.set_setting('INPUT_SOURCE', value) is True
        assert FakeVCP.writes[-1] == (1020, INPUT_SOURCE, written)

    def test_power_control(self):
        assert mic.set_setting('power control', 'standby') is True
        assert FakeVCP.writes[-1] == (1020, POWER_CONTROL, 4)

    @pytest.mark.parametrize('name,value', [
        ('INPUT_SOURCE', 'HDMI9'),
        ('INPUT_SOURCE', 0x42),
        ('POWER_CONTROL', 2),
        ('DISPLAY_MODE', -1),
        ('BRIGHTNESS', 'bright'),
        ('SHARPNESS', 50),
    ])
    def test_invalid_value(self, name, value):
        assert mic.set_setting(name, value) is False
        assert FakeVCP.writes == []

    def test_rejected(self):
        FakeVCP.rejected_writes.add((CONTRAST, 20))
        assert mic.set_setting('CONTRAST', 20) is False

    def test_mode(self):
        assert mic.set_setting('CONTRAST', 20, mode='NAME:LG') is True
        assert FakeVCP.value_of(103, CONTRAST, 0) == 20
        assert FakeVCP.value_of(103, CONTRAST, 1) == 20


def test_supports_setting():
    FakeVCP.unsupported.add(CONTRAST)
    assert mic.supports_setting('BRIGHTNESS') is True
    assert mic.supports_setting('CONTRAST') is False
    assert mic.supports_setting('SHARPNESS') is False


class TestEffects:
    def test_fade(self, sleep):
        FakeVCP.set_value(102, BRIGHTNESS, 50)
        assert mic.fade_to_black_and_restore(10, 2) is True
        assert FakeVCP.writes_to(BRIGHTNESS) == [25, 0, 25, 50]
        assert sleep.call_args_list[0].args[0] == pytest.approx(0.01)

    def test_fade_unreadable(self):
        FakeVCP.unsupported.add(BRIGHTNESS)
        assert mic.fade_to_black_and_restore() is False

    def test_fade_no_display(self):
        assert mic.fade_to_black_and_restore(mode='NAME:Samsung') is False

    def test_blackout(self):
        FakeVCP.set_value(101, BRIGHTNESS, 64)
        assert mic.blackout(mode='FIRST') is True
        assert FakeVCP.writes_to(POWER_CONTROL) == [4, 1]
        assert FakeVCP.value_of(101, BRIGHTNESS) == 64

    def test_blackout_unreadable(self):
        FakeVCP.unsupported.add(BRIGHTNESS)
        assert mic.blackout() is False
        assert FakeVCP.writes == []

    def test_blackout_raises(self, mocker: MockerFixture):
        mocker.patch.object(mic, '_blackout', side_effect=RuntimeError('boom'))
        assert mic.blackout() is False


class TestListMonitors:
    def test_names(self):
        assert mic.list_monitors() == ['DELL U2720Q', 'BenQ GL2450H', 'LG HDR 4K']

    def test_info(self):
        info = mic.list_monitors_info()
        assert [i['primary'] for i in info] == [False, True, False]
        assert info[1] == {
            'name': 'BenQ GL2450H', 'handle': 102, 'x': 0, 'y': 0,
            'width': 1920, 'height': 1080, 'primary': True, 'method': FakeVCP
        }

    def test_unsupported_platform(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(mic, '_OS_METHOD', None)
        assert mic.list_monitors_info() == []
        assert mic.list_monitors() == []


@pytest.mark.parametrize('name', [
    'brightness', 'contrast', 'red_gain', 'green_gain', 'blue_gain',
    'horizontal_position', 'vertical_position', 'horizontal_size'
])
def test_percentage_wrappers(name):
    getter = getattr(mic, f'get_{name}')
    setter = getattr(mic, f'set_{name}')
    assert setter(30, mode='FIRST') is True
    assert getter(mode='FIRST') == 30
    assert FakeVCP.writes[-1] == (1010, VCP_SETTINGS[name.upper()].code, 30)


@pytest.mark.parametrize('name,setting', [
    ('color_preset', 'COLOR_PRESET'),
    ('display_mode', 'DISPLAY_MODE'),
    ('dpms', 'DPMS_CONTROL'),
    ('osd', 'OSD_CONTROL'),
])
def test_raw_wrappers(name, setting):
    assert getattr(mic, f'set_{name}')(0x8000) is True
    assert getattr(mic, f'get_{name}')() == 0x8000
    assert FakeVCP.writes[-1] == (1020, VCP_SETTINGS[setting].code, 0x8000)


def test_choice_wrappers():
    assert mic.get_input_source() == 0x0F
    assert mic.set_input_source('HDMI1') is True
    assert mic.get_input_source() == 0x11
    assert mic.get_power_control() == 1
    assert mic.set_power_control('SLEEP') is True
    assert mic.get_power_control() == 5
