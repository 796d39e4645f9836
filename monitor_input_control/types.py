'''
Submodule containing types and type aliases used throughout the library.

Splitting these definitions into a seperate submodule allows for detailed
explanations and verbose type definitions, without cluttering up the rest
of the library.
'''
from typing import Any, Callable, Union
import sys

if sys.version_info[1] >= 9:
    from collections.abc import Generator
else:
    from typing import Generator  # noqa: F401

IntPercentage = int
'''
An integer between 0 and 100 (inclusive) that represents a level for
percentage-like settings such as brightness, contrast or colour gains.
'''

VCPCode = int
'''A one byte identifier for a monitor control, EG: `0x10` for brightness'''

SettingValue = Union[int, str]
'''
The value written to a setting. Percentage and raw settings take integers.
Enumerated settings (input source, power control) also accept their symbolic
names, for example `'HDMI1'` or `'STANDBY'`.
'''

MonitorMode = str
'''
How the target monitor is chosen from the enumerated displays.
Can be any one of:
- `'PRIMARY'`: the display positioned at (0, 0), or the first display if none is
- `'FIRST'`: the first display, in the order the OS enumerates them
- `'NAME:<substring>'`: the first display whose name contains `<substring>`
    (case-insensitive). `'MONITOR_NAME:<substring>'` is accepted as an alias
'''

Notifier = Callable[[str], Any]
'''A callable that broadcasts a one line, user visible message (EG: to a chat)'''
