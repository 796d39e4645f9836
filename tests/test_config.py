from pytest import MonkeyPatch

from monitor_input_control import config


def test_default_params(monkeypatch: MonkeyPatch):
    func = config.default_params(lambda *, mode=None, port_1=None, other=None: (mode, port_1, other))

    assert func() == (config.TARGET_MONITOR_MODE, config.PORT_1, None), 'sets default kwarg values'

    monkeypatch.setattr(config, 'TARGET_MONITOR_MODE', 'NAME:dell')
    monkeypatch.setattr(config, 'PORT_1', 'HDMI2')
    assert func() == ('NAME:dell', 'HDMI2', None), 'reads config at call time'

    assert func(mode='FIRST', port_1='DP') == ('FIRST', 'DP', None), 'should not override kwargs'
    assert func(mode=None) == ('NAME:dell', 'HDMI2', None), 'None falls back to config'


def test_only_accepted_params():
    func = config.default_params(lambda name, *, mode=None: (name, mode))
    assert func('BRIGHTNESS') == ('BRIGHTNESS', config.TARGET_MONITOR_MODE)
