'''
Switch a monitor's input source and adjust its on-screen-display settings over DDC/CI.

Every public function here is safe to call from an automation host: failures are
logged and reported through the return value, never raised.
'''
import logging
import platform
from typing import List, Optional, Type

from ._version import __author__, __version__  # noqa: F401
from . import config
from .channel import get_vcp, probe, set_vcp
from .displays import enumerate_monitors, get_target_monitor, select_monitor  # noqa: F401
from .effects import blackout as _blackout, fade_and_restore
from .exceptions import (DisplayNotFoundError, MonitorControlError,  # noqa: F401
                         NoValidDisplayError, UnrecognizedSettingError, format_exc)
from .helpers import (INPUT_SOURCES, VCP_SETTINGS, Monitor,  # noqa: F401
                      VCPMethod, resolve_value)
from .helpers import get_setting as _get_setting
from .state import ToggleStateStore
from .switcher import toggle_input
from .types import IntPercentage, MonitorMode, Notifier, SettingValue

_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())

UNSUPPORTED = -1
'''Returned by the `get_*` functions when a value could not be read'''


def _get_method() -> Type[VCPMethod]:
    if _OS_METHOD is None:
        raise MonitorControlError(f'unsupported platform ({platform.system()})')
    return _OS_METHOD


@config.default_params
def toggle(
    *,
    mode: Optional[MonitorMode] = None,
    port_1: Optional[str] = None,
    port_2: Optional[str] = None,
    public_message: Optional[bool] = None,
    state_file: Optional[str] = None,
    notify: Optional[Notifier] = None
) -> bool:
    '''
    Switch the target monitor to whichever of the two configured input sources
    was not applied last. Unset arguments come from `.config`.

    Args:
        mode (.types.MonitorMode): how to choose the target monitor
        port_1: the default input source, EG: `'DISPLAYPORT'`
        port_2: the alternate input source, EG: `'HDMI1'`
        public_message: broadcast successful changes through `notify`
        state_file: where the last applied input is stored
        notify: the notification sink for public messages

    Returns:
        False if the toggle failed outright (bad configuration, no matching monitor, etc).
        A switch that the monitor silently did not accept is logged as a warning and still
        returns True, so that automation hosts do not retry in a loop.

    Example:
        ```python
        import monitor_input_control as mic

        # flip between DisplayPort and HDMI 1 on the primary monitor
        mic.toggle()

        # flip a specific monitor between HDMI inputs and announce it
        mic.toggle(mode='NAME:Dell', port_1='HDMI1', port_2='HDMI2', public_message=True, notify=print)
        ```
    '''
    _logger.info('monitor input change requested')
    try:
        switched = toggle_input(
            mode, port_1, port_2,
            store=ToggleStateStore(state_file),
            method=_get_method(),
            notify=notify,
            public_message=bool(public_message)
        )
    except Exception as e:
        _logger.error(f'toggle failed - {format_exc(e)}')
        return False

    if not switched:
        _logger.warning('monitor input change did not succeed but no exceptions were thrown')
    return True


@config.default_params
def get_setting(name: str, *, mode: Optional[MonitorMode] = None) -> int:
    '''
    Read the current value of a named setting from the target monitor.

    Args:
        name: a key of `.helpers.VCP_SETTINGS`, EG: `'BRIGHTNESS'`
        mode (.types.MonitorMode): how to choose the target monitor

    Returns:
        The current value, or `UNSUPPORTED` (-1) if it could not be read

    Example:
        ```python
        import monitor_input_control as mic

        print(mic.get_setting('contrast'))
        ```
    '''
    try:
        setting = _get_setting(name)
        value = get_vcp(get_target_monitor(mode, _get_method()), setting.code)
    except Exception as e:
        _logger.error(f'get_setting {name!r} failed - {format_exc(e)}')
        return UNSUPPORTED
    return UNSUPPORTED if value is None else value


@config.default_params
def set_setting(name: str, value: SettingValue, *, mode: Optional[MonitorMode] = None) -> bool:
    '''
    Write a named setting on the target monitor.

    Percentage settings are clamped to 0-100 before being written. `INPUT_SOURCE`
    and `POWER_CONTROL` also accept names, EG: `'HDMI2'` or `'STANDBY'`.

    Args:
        name: a key of `.helpers.VCP_SETTINGS`
        value: the new value
        mode (.types.MonitorMode): how to choose the target monitor

    Returns:
        Whether the monitor accepted the new value

    Example:
        ```python
        import monitor_input_control as mic

        mic.set_setting('BRIGHTNESS', 150)  # written as 100
        mic.set_setting('INPUT_SOURCE', 'HDMI 2')
        ```
    '''
    try:
        setting = _get_setting(name)
        resolved = resolve_value(setting, value)
        _logger.info(f'set {setting.name} (0x{setting.code:02X}) -> {resolved}')
        return set_vcp(get_target_monitor(mode, _get_method()), setting.code, resolved)
    except Exception as e:
        _logger.error(f'set_setting {name!r} failed - {format_exc(e)}')
        return False


@config.default_params
def supports_setting(name: str, *, mode: Optional[MonitorMode] = None) -> bool:
    '''Whether the target monitor answers a read of the named setting'''
    try:
        return probe(get_target_monitor(mode, _get_method()), _get_setting(name).code)
    except Exception as e:
        _logger.error(f'supports_setting {name!r} failed - {format_exc(e)}')
        return False


@config.default_params
def fade_to_black_and_restore(
    step_delay_ms: int = 50, steps: int = 20, *, mode: Optional[MonitorMode] = None
) -> bool:
    '''
    Fade the target monitor's brightness down to 0, hold briefly and fade back up.
    This blocks until the fade is finished.

    Args:
        step_delay_ms: milliseconds to wait after each step
        steps: the number of steps in each direction
        mode (.types.MonitorMode): how to choose the target monitor

    Returns:
        False if the fade could not be started
    '''
    try:
        return fade_and_restore(
            get_target_monitor(mode, _get_method()), step_delay=step_delay_ms / 1000, steps=steps)
    except Exception as e:
        _logger.error(f'fade_to_black_and_restore failed - {format_exc(e)}')
        return False


@config.default_params
def blackout(*, mode: Optional[MonitorMode] = None) -> bool:
    '''
    Black out the target monitor for a few seconds and then restore it.
    See `.effects.blackout`. This blocks until the monitor is restored.

    Returns:
        False if the blackout could not be started
    '''
    try:
        return _blackout(get_target_monitor(mode, _get_method()))
    except Exception as e:
        _logger.error(f'blackout failed - {format_exc(e)}')
        return False


def list_monitors_info() -> List[dict]:
    '''
    List information about every detected monitor, in enumeration order

    Example:
        ```python
        import monitor_input_control as mic
        for display in mic.list_monitors_info():
            print(display['name'], display['x'], display['y'], display['primary'])
        ```
    '''
    try:
        return [i.as_dict() for i in enumerate_monitors(_get_method())]
    except Exception as e:
        _logger.error(f'list_monitors_info failed - {format_exc(e)}')
        return []


def list_monitors() -> List[str]:
    '''
    List the names of all detected monitors

    Example:
        ```python
        import monitor_input_control as mic
        print(mic.list_monitors())
        # eg: ['DELL U2720Q', 'Generic PnP Monitor']
        ```
    '''
    return [i['name'] for i in list_monitors_info()]


def get_brightness(**kwargs) -> int:
    return get_setting('BRIGHTNESS', **kwargs)


def set_brightness(value: IntPercentage, **kwargs) -> bool:
    return set_setting('BRIGHTNESS', value, **kwargs)


def get_contrast(**kwargs) -> int:
    return get_setting('CONTRAST', **kwargs)


def set_contrast(value: IntPercentage, **kwargs) -> bool:
    return set_setting('CONTRAST', value, **kwargs)


def get_red_gain(**kwargs) -> int:
    return get_setting('RED_GAIN', **kwargs)


def set_red_gain(value: IntPercentage, **kwargs) -> bool:
    return set_setting('RED_GAIN', value, **kwargs)


def get_green_gain(**kwargs) -> int:
    return get_setting('GREEN_GAIN', **kwargs)


def set_green_gain(value: IntPercentage, **kwargs) -> bool:
    return set_setting('GREEN_GAIN', value, **kwargs)


def get_blue_gain(**kwargs) -> int:
    return get_setting('BLUE_GAIN', **kwargs)


def set_blue_gain(value: IntPercentage, **kwargs) -> bool:
    return set_setting('BLUE_GAIN', value, **kwargs)


def get_horizontal_position(**kwargs) -> int:
    return get_setting('HORIZONTAL_POSITION', **kwargs)


def set_horizontal_position(value: IntPercentage, **kwargs) -> bool:
    return set_setting('HORIZONTAL_POSITION', value, **kwargs)


def get_vertical_position(**kwargs) -> int:
    return get_setting('VERTICAL_POSITION', **kwargs)


def set_vertical_position(value: IntPercentage, **kwargs) -> bool:
    return set_setting('VERTICAL_POSITION', value, **kwargs)


def get_horizontal_size(**kwargs) -> int:
    return get_setting('HORIZONTAL_SIZE', **kwargs)


def set_horizontal_size(value: IntPercentage, **kwargs) -> bool:
    return set_setting('HORIZONTAL_SIZE', value, **kwargs)


def get_color_preset(**kwargs) -> int:
    return get_setting('COLOR_PRESET', **kwargs)


def set_color_preset(value: int, **kwargs) -> bool:
    return set_setting('COLOR_PRESET', value, **kwargs)


def get_display_mode(**kwargs) -> int:
    return get_setting('DISPLAY_MODE', **kwargs)


def set_display_mode(value: int, **kwargs) -> bool:
    return set_setting('DISPLAY_MODE', value, **kwargs)


def get_input_source(**kwargs) -> int:
    return get_setting('INPUT_SOURCE', **kwargs)


def set_input_source(value: SettingValue, **kwargs) -> bool:
    '''`value` may be an input name (EG: `'HDMI2'`) or its raw code'''
    return set_setting('INPUT_SOURCE', value, **kwargs)


def get_power_control(**kwargs) -> int:
    return get_setting('POWER_CONTROL', **kwargs)


def set_power_control(value: SettingValue, **kwargs) -> bool:
    '''`value` may be `'ON'`, `'STANDBY'` or `'SLEEP'`, or the matching code 1, 4 or 5'''
    return set_setting('POWER_CONTROL', value, **kwargs)


def get_dpms(**kwargs) -> int:
    return get_setting('DPMS_CONTROL', **kwargs)


def set_dpms(value: int, **kwargs) -> bool:
    return set_setting('DPMS_CONTROL', value, **kwargs)


def get_osd(**kwargs) -> int:
    return get_setting('OSD_CONTROL', **kwargs)


def set_osd(value: int, **kwargs) -> bool:
    return set_setting('OSD_CONTROL', value, **kwargs)


_OS_METHOD: Optional[Type[VCPMethod]] = None
if platform.system() == 'Windows':
    from . import windows
    _OS_METHOD = windows.VCP
else:
    _logger.warning(
        f'package imported on unsupported platform ({platform.system()})')
