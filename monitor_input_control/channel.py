'''
Single control code reads and writes against the physical monitors behind a display.

Every function here opens the physical device handles it needs through
`physical_monitors` and has released all of them by the time it returns.
'''
import logging
import time
from contextlib import contextmanager
from typing import List, Optional

from .exceptions import VCPError, format_exc
from .helpers import Monitor, PhysicalMonitor
from .types import Generator, VCPCode

_logger = logging.getLogger(__name__)


@contextmanager
def physical_monitors(monitor: Monitor) -> Generator[List[PhysicalMonitor], None, None]:
    '''
    Open every physical monitor behind `monitor.handle` and destroy them
    again on exit, whether or not the body raised.

    Raises:
        VCPError: if the display has no physical monitors or they could not be opened

    Example:
        ```python
        from monitor_input_control.channel import physical_monitors

        with physical_monitors(monitor) as handles:
            for physical in handles:
                print(physical.description)
        ```
    '''
    method = monitor.method
    count = method.get_physical_monitor_count(monitor.handle)
    if count <= 0:
        raise VCPError(f'no physical monitors on display {monitor.name!r}')

    handles = method.get_physical_monitors(monitor.handle, count)
    _logger.debug(f'opened {len(handles)} physical monitor(s) for {monitor.name!r}')
    try:
        yield handles
    finally:
        for physical in handles:
            try:
                if not method.destroy_physical_monitor(physical):
                    _logger.warning(f'DestroyPhysicalMonitor failed for {physical.description!r}')
            except Exception as e:
                _logger.warning(f'failed to destroy physical monitor {physical.description!r} - {format_exc(e)}')


def _read(monitor: Monitor, physical: PhysicalMonitor, code: VCPCode, max_tries: int) -> Optional[int]:
    for attempt in range(max_tries):
        try:
            value = monitor.method.get_vcp_feature(physical, code)
        except Exception as e:
            _logger.debug(f'read 0x{code:02X} from {physical.description!r} raised - {format_exc(e)}')
            value = None
        if value is not None:
            return value
        if attempt + 1 < max_tries:
            time.sleep(0.02 if attempt < 20 else 0.1)
    return None


def get_vcp(monitor: Monitor, code: VCPCode, max_tries: int = 1) -> Optional[int]:
    '''
    Read the current value of a control code.

    Args:
        monitor: the display to query
        code: the VCP code to read
        max_tries: the maximum number of attempts per physical monitor

    Returns:
        The value reported by the first physical monitor to answer,
        or None if the code is unsupported or no physical monitor answered
    '''
    try:
        with physical_monitors(monitor) as handles:
            for physical in handles:
                value = _read(monitor, physical, code, max_tries)
                if value is not None:
                    _logger.debug(f'{physical.description!r} 0x{code:02X} = {value}')
                    return value
    except VCPError as e:
        _logger.error(f'get_vcp 0x{code:02X} on {monitor.name!r} failed - {format_exc(e)}')
        return None

    _logger.warning(f'no physical monitor on {monitor.name!r} answered a read of 0x{code:02X}')
    return None


def set_vcp(monitor: Monitor, code: VCPCode, value: int, max_tries: int = 1) -> bool:
    '''
    Write a value to a control code on every physical monitor behind a display.

    The current value is read first for the log. Failing that read never
    prevents the write.

    Args:
        monitor: the display to adjust
        code: the VCP code to write
        value: the new value
        max_tries: the maximum number of write attempts per physical monitor

    Returns:
        True if at least one physical monitor accepted the write
    '''
    written = False
    try:
        with physical_monitors(monitor) as handles:
            for physical in handles:
                _logger.info(f'setting 0x{code:02X} -> {value} on physical monitor {physical.description!r}')
                current = _read(monitor, physical, code, 1)
                if current is not None:
                    _logger.info(f'current value of 0x{code:02X}: {current}')

                for attempt in range(max_tries):
                    try:
                        if monitor.method.set_vcp_feature(physical, code, value):
                            written = True
                            break
                    except Exception as e:
                        _logger.info(f'error writing to physical monitor {physical.description!r} - {format_exc(e)}')
                    if attempt + 1 < max_tries:
                        time.sleep(0.02 if attempt < 20 else 0.1)
                else:
                    _logger.info(f'SetVCPFeature failed for {physical.description!r} after {max_tries} tries')
    except VCPError as e:
        _logger.error(f'set_vcp 0x{code:02X} on {monitor.name!r} failed - {format_exc(e)}')
        return False

    if not written:
        _logger.warning(f'failed to set 0x{code:02X} on {monitor.name!r}')
    return written


def probe(monitor: Monitor, code: VCPCode) -> bool:
    '''Whether the display answers a read of `code`'''
    return get_vcp(monitor, code) is not None
