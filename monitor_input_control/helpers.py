'''
Helper functions for the library
'''
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Tuple, Type

from .exceptions import EDIDParseError, UnrecognizedSettingError
from .types import Generator, IntPercentage, SettingValue, VCPCode

_logger = logging.getLogger(__name__)

INPUT_SOURCES: Dict[str, int] = {
    'VGA': 0x01,
    'VGA1': 0x01,
    'DVI': 0x03,
    'DVI1': 0x03,
    'DVI2': 0x04,
    'HDMI': 0x11,
    'HDMI1': 0x11,
    'HDMI 1': 0x11,
    'HDMI2': 0x12,
    'HDMI 2': 0x12,
    'DISPLAYPORT': 0x0F,
    'DP': 0x0F,
    'DISPLAY PORT': 0x0F,
    'USB-C': 0x1B
}
'''Values for VCP code 0x60 (input source select). Keys are matched case-insensitively'''

POWER_STATES: Dict[str, int] = {
    'ON': 0x01,
    'STANDBY': 0x04,
    'SLEEP': 0x05
}
'''Values for the `POWER_CONTROL` setting'''


class VCPSetting(NamedTuple):
    '''A named monitor control'''
    name: str
    code: VCPCode
    kind: str = 'percentage'
    '''
    The value domain. `'percentage'` values are clamped to [0, 100],
    `'choice'` values must come from `choices` and `'raw'` values are passed through
    '''
    choices: Optional[Dict[str, int]] = None


VCP_SETTINGS: Dict[str, VCPSetting] = {
    setting.name: setting for setting in (
        VCPSetting('BRIGHTNESS', 0x10),
        VCPSetting('CONTRAST', 0x12),
        VCPSetting('COLOR_PRESET', 0x14, 'raw'),
        VCPSetting('RED_GAIN', 0x16),
        VCPSetting('GREEN_GAIN', 0x18),
        VCPSetting('BLUE_GAIN', 0x1A),
        VCPSetting('INPUT_SOURCE', 0x60, 'choice', INPUT_SOURCES),
        VCPSetting('ACTIVE_CONTROL', 0x52, 'raw'),
        VCPSetting('HORIZONTAL_POSITION', 0xAC),
        VCPSetting('VERTICAL_POSITION', 0xAE),
        VCPSetting('HORIZONTAL_SIZE', 0xB6),
        VCPSetting('DISPLAY_MODE', 0xC0, 'raw'),
        VCPSetting('POWER_CONTROL', 0xC6, 'choice', POWER_STATES),
        VCPSetting('DPMS_CONTROL', 0xD6, 'raw'),
        VCPSetting('OSD_CONTROL', 0xF0, 'raw'),
    )
}

BRIGHTNESS = VCP_SETTINGS['BRIGHTNESS'].code
CONTRAST = VCP_SETTINGS['CONTRAST'].code
RED_GAIN = VCP_SETTINGS['RED_GAIN'].code
GREEN_GAIN = VCP_SETTINGS['GREEN_GAIN'].code
BLUE_GAIN = VCP_SETTINGS['BLUE_GAIN'].code
INPUT_SOURCE = VCP_SETTINGS['INPUT_SOURCE'].code
POWER_CONTROL = VCP_SETTINGS['POWER_CONTROL'].code


def _lookup(table: Dict[str, int], name: str) -> Optional[Tuple[str, int]]:
    '''case-insensitive search of a name table, returning the canonical key and value'''
    search = name.strip().upper()
    for key, value in table.items():
        if key.upper() == search:
            return key, value
    return None


def get_setting(name: str) -> VCPSetting:
    '''
    Look up a named setting in `VCP_SETTINGS`. Matching ignores case and treats
    spaces and hyphens as underscores, so `'red gain'` finds `RED_GAIN`.

    Raises:
        UnrecognizedSettingError: if the name is unknown. The message lists all valid names
    '''
    if not isinstance(name, str):
        raise TypeError(f'name must be of type str, not {type(name)!r}')
    key = name.strip().upper().replace(' ', '_').replace('-', '_')
    if key not in VCP_SETTINGS:
        _logger.debug(f'requested setting {name!r} invalid')
        raise UnrecognizedSettingError(name, tuple(VCP_SETTINGS))
    return VCP_SETTINGS[key]


def input_source_code(name: str) -> int:
    '''
    Returns the VCP value for a named input source, EG: `'hdmi 2'` -> `0x12`

    Raises:
        UnrecognizedSettingError: if the name is not in `INPUT_SOURCES`
    '''
    match = _lookup(INPUT_SOURCES, name)
    if match is None:
        raise UnrecognizedSettingError(name, tuple(INPUT_SOURCES), kind='input source')
    return match[1]


def percentage(value: SettingValue, lower_bound: int = 0, upper_bound: int = 100) -> IntPercentage:
    '''
    Convenience function to convert a value into a percentage. Can handle
    integers, floats and strings.

    Args:
        value: the value to convert
        lower_bound: the minimum value allowed
        upper_bound: the maximum value allowed

    Returns:
        `.types.IntPercentage`: The value, clamped between `lower_bound` and `upper_bound`
    '''
    value = int(float(str(value)))
    return min(upper_bound, max(lower_bound, value))


def resolve_value(setting: VCPSetting, value: SettingValue) -> int:
    '''
    Convert a user supplied value into the integer written to the display,
    following the value domain of `setting`.

    Raises:
        UnrecognizedSettingError: if a symbolic value is not valid for a `'choice'` setting
        ValueError: if a numeric value is outside the allowed domain
    '''
    if setting.kind == 'percentage':
        return percentage(value)

    if setting.kind == 'choice' and setting.choices is not None:
        if isinstance(value, str) and not value.strip().isdigit():
            match = _lookup(setting.choices, value)
            if match is None:
                raise UnrecognizedSettingError(
                    value, tuple(setting.choices), kind=setting.name.lower().replace('_', ' '))
            return match[1]
        value = int(value)
        if value not in setting.choices.values():
            raise ValueError(
                f'invalid value {value!r} for {setting.name},'
                f' must be one of: {sorted(set(setting.choices.values()))}')
        return value

    value = int(value)
    if value < 0:
        raise ValueError(f'{setting.name} value must not be negative, got {value!r}')
    return value


def fade_range(original: int, steps: int, down: bool = True) -> Generator[int, None, None]:
    '''
    Yields `steps` values stepping linearly between `original` and 0.

    The step size is `original // steps`, so when `original` is not evenly divisible
    the intermediate values do not land exactly on the curve. The last value is
    always the end point (0 on the way down, `original` on the way up).

    Args:
        original: the starting (or finishing, when `down` is False) value
        steps: the number of values to yield. Values below 1 are treated as 1
        down: fade from `original` to 0, rather than from 0 to `original`
    '''
    steps = max(1, int(steps))
    step = original // steps
    for i in range(1, steps):
        if down:
            yield min(100, max(0, original - step * i))
        else:
            yield min(original, max(0, step * i))
    yield 0 if down else original


EDID_NAME_DESCRIPTOR = bytes.fromhex('00 00 00 fc 00')
EDID_DESCRIPTOR_OFFSETS = (54, 72, 90, 108)
'''Byte offsets of the four 18 byte display descriptor blocks in an EDID 1.x base block'''


def parse_edid_name(edid: bytes) -> Optional[str]:
    '''
    Extract the display name from the monitor name descriptor of an EDID block.
    See [EDID 1.4](https://en.wikipedia.org/wiki/Extended_Display_Identification_Data#EDID_1.4_data_format)

    Returns:
        The display name, or None if the EDID carries no name descriptor

    Raises:
        EDIDParseError: if the EDID is too short or has an invalid header
        TypeError: if `edid` is not `bytes`
    '''
    if not isinstance(edid, (bytes, bytearray)):
        raise TypeError(f'edid must be of type bytes, not {type(edid)!r}')
    if len(edid) < 128:
        raise EDIDParseError(f'edid too short ({len(edid)} bytes)')
    if edid[:8] != bytes.fromhex('00 ff ff ff ff ff ff 00'):
        raise EDIDParseError('invalid edid header')

    for offset in EDID_DESCRIPTOR_OFFSETS:
        block = edid[offset:offset + 18]
        if block.startswith(EDID_NAME_DESCRIPTOR):
            # name is terminated by a newline and padded with spaces
            name = block[len(EDID_NAME_DESCRIPTOR):].split(b'\n', 1)[0]
            return name.decode('ascii', errors='replace').strip() or None
    return None


class PhysicalMonitor(NamedTuple):
    '''A physical device handle obtained from a display handle'''
    handle: int
    description: str = ''


@dataclass
class Monitor():
    '''
    Represents a single display surface, as reported by the OS.
    Instances are created fresh by every call to `.displays.enumerate_monitors`
    '''
    handle: int
    '''The OS owned display handle (HMONITOR). It is never freed by this library'''
    method: Type[VCPMethod] = field(repr=False)
    '''The backend through which this display can be addressed'''
    name: str = 'Monitor'
    '''A best-effort human readable name. Defaults to a placeholder'''
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def is_primary(self) -> bool:
        '''Whether this display sits at the desktop origin'''
        return self.position == (0, 0)

    def as_dict(self) -> dict:
        return {
            'name': self.name,
            'handle': self.handle,
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'primary': self.is_primary,
            'method': self.method
        }


class VCPMethod(ABC):
    '''
    The OS specific primitives the rest of the library is built on.
    Implementations must not hold any handle between calls.
    '''
    @classmethod
    @abstractmethod
    def iter_display_monitors(cls) -> Generator[Tuple[int, Tuple[int, int, int, int]], None, None]:
        '''
        Yields a `(handle, (left, top, right, bottom))` tuple for every display
        surface, in the order the OS enumerates them
        '''
        ...

    @classmethod
    def get_edid_names(cls) -> Dict[int, str]:
        '''
        Returns a mapping of display handle to the name stored in that display's EDID.
        Displays without a readable EDID are omitted.
        '''
        return {}

    @classmethod
    @abstractmethod
    def get_physical_monitor_count(cls, handle: int) -> int:
        '''
        Raises:
            VCPError: if the count cannot be determined
        '''
        ...

    @classmethod
    @abstractmethod
    def get_physical_monitors(cls, handle: int, count: int) -> List[PhysicalMonitor]:
        '''
        Open the physical device handles behind a display handle.
        Every returned handle must later be passed to `destroy_physical_monitor`

        Raises:
            VCPError: if the handles cannot be obtained. No handles are open in this case
        '''
        ...

    @classmethod
    @abstractmethod
    def destroy_physical_monitor(cls, physical: PhysicalMonitor) -> bool:
        ...

    @classmethod
    @abstractmethod
    def get_vcp_feature(cls, physical: PhysicalMonitor, code: VCPCode) -> Optional[int]:
        '''
        Returns:
            The current value of `code`, or None if the display did not answer
        '''
        ...

    @classmethod
    @abstractmethod
    def set_vcp_feature(cls, physical: PhysicalMonitor, code: VCPCode, value: int) -> bool:
        '''
        Returns:
            Whether the display accepted the write
        '''
        ...
