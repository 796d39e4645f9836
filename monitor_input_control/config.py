'''
Contains globally applicable configuration variables.
'''
import os
from functools import wraps
from inspect import signature
from typing import Callable, Optional

from .types import MonitorMode, Notifier

_PARAMS = {
    'mode': 'TARGET_MONITOR_MODE',
    'port_1': 'PORT_1',
    'port_2': 'PORT_2',
    'public_message': 'PUBLIC_CHANGE_MESSAGE',
    'state_file': 'STATE_FILE',
    'notify': 'NOTIFY'
}


def default_params(func: Callable):
    '''
    This decorator sets default kwarg values using global configuration variables.
    Only kwargs that the decorated function accepts are filled in, and only
    when the caller omits them or passes `None`.
    '''
    accepted = [i for i in _PARAMS if i in signature(func).parameters]

    @wraps(func)
    def wrapper(*args, **kwargs):
        for key in accepted:
            if kwargs.get(key) is None:
                kwargs[key] = globals()[_PARAMS[key]]
        return func(*args, **kwargs)
    return wrapper


TARGET_MONITOR_MODE: MonitorMode = 'PRIMARY'
'''
Default value for the `mode` parameter in top-level functions.

See `.types.MonitorMode` for available values
'''

PORT_1: str = 'DISPLAYPORT'
'''The first of the two input sources that `toggle` alternates between. Also the default target'''

PORT_2: str = 'HDMI1'
'''The second of the two input sources that `toggle` alternates between'''

PUBLIC_CHANGE_MESSAGE: bool = False
'''Whether a successful input change is broadcast through `NOTIFY` or only logged'''

STATE_FILE: str = os.path.join(
    os.path.expanduser('~'), '.monitor_input_control', 'monitor_input_state.txt'
)
'''Where the last applied input source name is stored between invocations'''

NOTIFY: Optional[Notifier] = None
'''
The notification sink used for public change messages, for example a function
that posts to a chat. If this is None, public messages are only logged.
'''
