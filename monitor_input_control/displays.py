'''
Discovering displays and choosing which one to talk to.
'''
import logging
from typing import List, Optional, Sequence, Tuple, Type

from .channel import physical_monitors
from .exceptions import DisplayNotFoundError, NoValidDisplayError, format_exc
from .helpers import Monitor, VCPMethod
from .types import MonitorMode

_logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = 'Monitor'
'''Name given to displays whose name could not be resolved'''

GENERIC_NAMES = ('', 'generic pnp monitor', 'generic non-pnp monitor')
'''Physical monitor descriptions that say nothing about the actual display'''

_NAME_PREFIXES = ('NAME:', 'MONITOR_NAME:')


def _physical_description(monitor: Monitor) -> Optional[str]:
    with physical_monitors(monitor) as handles:
        if handles:
            return handles[0].description.strip('\0 ')
    return None


def enumerate_monitors(method: Type[VCPMethod]) -> List[Monitor]:
    '''
    Walk every display surface known to the OS, once.

    Each display is named after the description of its first physical monitor.
    Generic descriptions are replaced by the EDID name where the backend has one,
    and anything that still has no name gets `PLACEHOLDER_NAME`. Failing to name
    one display never stops the others from being listed.

    Args:
        method: the backend used to talk to the OS

    Returns:
        The displays in the OS's own enumeration order. This may be empty
    '''
    try:
        edid_names = method.get_edid_names()
    except Exception as e:
        _logger.warning(f'failed to gather EDID display names - {format_exc(e)}')
        edid_names = {}

    monitors = []
    for handle, (left, top, right, bottom) in method.iter_display_monitors():
        monitor = Monitor(
            handle=handle, method=method,
            x=left, y=top, width=right - left, height=bottom - top
        )
        try:
            description = _physical_description(monitor)
        except Exception as e:
            _logger.info(f'error collecting monitor info for handle {handle} - {format_exc(e)}')
            description = None

        if description is None or description.lower() in GENERIC_NAMES:
            description = edid_names.get(handle) or description
        monitor.name = description or PLACEHOLDER_NAME
        monitors.append(monitor)

    return monitors


def parse_mode(mode: MonitorMode) -> Tuple[str, Optional[str]]:
    '''
    Split a targeting mode into its keyword and argument.

    Example:
        ```python
        parse_mode('PRIMARY')  # ('PRIMARY', None)
        parse_mode('name:Dell')  # ('NAME', 'Dell')
        parse_mode('MONITOR_NAME:LG')  # ('NAME', 'LG')
        ```

    Raises:
        ValueError: if the mode is not recognised
    '''
    if not isinstance(mode, str):
        raise TypeError(f'mode must be of type str, not {type(mode)!r}')

    mode = mode.lstrip()
    for prefix in _NAME_PREFIXES:
        if mode[:len(prefix)].upper() == prefix:
            return 'NAME', mode[len(prefix):]

    keyword = mode.strip().upper()
    if keyword in ('PRIMARY', 'FIRST'):
        return keyword, None

    raise ValueError(
        f'invalid monitor mode {mode!r}, must be one of: PRIMARY, FIRST, NAME:<substring>')


def select_monitor(mode: MonitorMode, monitors: Sequence[Monitor]) -> Optional[Monitor]:
    '''
    Choose one display from an enumerated list. This performs no I/O.
    Where more than one display qualifies, the earliest in the list wins.

    Args:
        mode (.types.MonitorMode): how to choose
        monitors: the displays to choose from

    Returns:
        The chosen display, or None if there are no displays or no name matched

    Example:
        ```python
        import monitor_input_control as mic
        from monitor_input_control.displays import enumerate_monitors, select_monitor

        monitor = select_monitor('NAME:dell', enumerate_monitors(mic._OS_METHOD))
        ```
    '''
    keyword, search = parse_mode(mode)
    if not monitors:
        return None

    if keyword == 'PRIMARY':
        for monitor in monitors:
            if monitor.is_primary:
                return monitor
        return monitors[0]

    if keyword == 'FIRST':
        return monitors[0]

    search = (search or '').lower()
    for monitor in monitors:
        if search in monitor.name.lower():
            return monitor
    return None


def get_target_monitor(mode: MonitorMode, method: Type[VCPMethod]) -> Monitor:
    '''
    Enumerate the displays and select one of them.

    Raises:
        NoValidDisplayError: if no displays were found
        DisplayNotFoundError: if no display matched `mode`
        ValueError: if `mode` is not a valid `.types.MonitorMode`
    '''
    parse_mode(mode)
    monitors = enumerate_monitors(method)

    _logger.info(f'found {len(monitors)} monitors:')
    for index, monitor in enumerate(monitors):
        primary = ' [PRIMARY]' if monitor.is_primary else ''
        _logger.info(
            f'  [{index}] {monitor.name} at ({monitor.x}, {monitor.y})'
            f' {monitor.width}x{monitor.height}{primary}'
        )

    if not monitors:
        raise NoValidDisplayError('no displays detected')

    target = select_monitor(mode, monitors)
    if target is None:
        raise DisplayNotFoundError(f'no display matching {mode!r} found')

    _logger.info(f'selected monitor {target.name!r} ({mode}), handle {target.handle}')
    return target
