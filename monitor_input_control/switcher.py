'''
Toggling a display between two configured input sources.
'''
import logging
from typing import Optional, Type

from .channel import set_vcp
from .displays import get_target_monitor
from .exceptions import format_exc
from .helpers import INPUT_SOURCE, VCPMethod, input_source_code
from .state import ToggleStateStore
from .types import MonitorMode, Notifier

_logger = logging.getLogger(__name__)


def next_input(last: Optional[str], port_1: str, port_2: str) -> str:
    '''
    Work out which input to switch to, given the last one applied.

    Example:
        ```python
        next_input('HDMI1', 'DISPLAYPORT', 'HDMI1')  # 'DISPLAYPORT'
        next_input('DISPLAYPORT', 'DISPLAYPORT', 'HDMI1')  # 'HDMI1'
        next_input(None, 'DISPLAYPORT', 'HDMI1')  # 'DISPLAYPORT'
        ```
    '''
    if last:
        # PORT_2 takes precedence when both prefixes match
        if last.upper().startswith(port_2.upper()):
            return port_1
        if last.upper().startswith(port_1.upper()):
            return port_2
    return port_1


def toggle_input(
    mode: MonitorMode,
    port_1: str,
    port_2: str,
    store: ToggleStateStore,
    method: Type[VCPMethod],
    notify: Optional[Notifier] = None,
    public_message: bool = False
) -> bool:
    '''
    Switch the target display to whichever of `port_1` and `port_2` was not applied last.

    Args:
        mode (.types.MonitorMode): how to choose the target display
        port_1: the default input source
        port_2: the alternate input source
        store: where the last applied input is kept
        method: the backend used to talk to the OS
        notify: receives a one line message after a successful switch, if `public_message` is set
        public_message: whether to broadcast the change through `notify`

    Returns:
        True if the display accepted the new input. Nothing is persisted otherwise

    Raises:
        UnrecognizedSettingError: if either port is not a known input source.
            This is raised before any device I/O happens
        NoValidDisplayError: if no displays were found
        DisplayNotFoundError: if no display matched `mode`
    '''
    for port in (port_1, port_2):
        input_source_code(port)

    target_input = next_input(store.load(), port_1, port_2)
    code = input_source_code(target_input)
    _logger.info(f'toggling to: {target_input} (0x{code:02X})')

    monitor = get_target_monitor(mode, method)
    if not set_vcp(monitor, INPUT_SOURCE, code):
        return False

    store.save(target_input)
    _logger.info(f'successfully switched to: {target_input}')

    if public_message:
        message = f'Monitor switched to {target_input}'
        if notify is None:
            _logger.info(f'no notifier configured, not broadcasting {message!r}')
        else:
            try:
                notify(message)
            except Exception as e:
                _logger.warning(f'failed to send change message - {format_exc(e)}')
    return True
