import logging
import threading
from ctypes import Structure, WinError, byref, windll
from ctypes.wintypes import BYTE, DWORD, HANDLE, HMONITOR, WCHAR
from typing import Dict, List, Optional, Tuple

import pythoncom
import pywintypes
import win32api
import wmi

from .exceptions import EDIDParseError, VCPError, format_exc
from .helpers import PhysicalMonitor, VCPMethod, parse_edid_name
from .types import Generator, VCPCode

_logger = logging.getLogger(__name__)


def _wmi_init():
    '''internal function to create and return a wmi instance'''
    # WMI calls don't work in new threads so we have to run this check
    if threading.current_thread() != threading.main_thread():
        pythoncom.CoInitialize()
    return wmi.WMI(namespace='wmi')


def enum_display_devices() -> Generator[Tuple[int, win32api.PyDISPLAY_DEVICEType], None, None]:
    '''
    Yields the display handle and display device of every display surface
    '''
    for pyhandle, _hdc, _rect in win32api.EnumDisplayMonitors():
        monitor_info = win32api.GetMonitorInfo(pyhandle)
        try:
            # EDD_GET_DEVICE_INTERFACE_NAME flag to populate DeviceID field
            device = win32api.EnumDisplayDevices(monitor_info['Device'], 0, 1)
        except pywintypes.error:
            _logger.debug(f'failed to get display device {monitor_info["Device"]}')
        else:
            yield int(pyhandle), device


class VCP(VCPMethod):
    '''DDC/CI access through the Windows Monitor Configuration API (dxva2.dll)'''
    _logger = _logger.getChild('VCP')

    class _PHYSICAL_MONITOR(Structure):
        '''internal class, do not call'''
        _fields_ = [('handle', HANDLE),
                    ('description', WCHAR * 128)]

    @classmethod
    def iter_display_monitors(cls) -> Generator[Tuple[int, Tuple[int, int, int, int]], None, None]:
        for pyhandle, _hdc, rect in win32api.EnumDisplayMonitors():
            yield int(pyhandle), tuple(rect)

    @classmethod
    def get_edid_names(cls) -> Dict[int, str]:
        '''
        Match each display handle to the name in its EDID, read through WMI.
        Displays are matched on the instance UID shared by the WMI instance
        name and the display device ID.
        '''
        edid_names = {}
        for monitor in _wmi_init().WmiMonitorDescriptorMethods():
            uid = monitor.InstanceName.replace('_0', '', 1).split('\\')[2]
            try:
                name = parse_edid_name(bytes(monitor.WmiGetMonitorRawEEdidV1Block(0)[0]))
            except EDIDParseError as e:
                cls._logger.warning(f'exception parsing edid for {monitor.InstanceName} - {format_exc(e)}')
                continue
            except Exception as e:
                # don't do specific exception classes here because WMI does not play ball with it
                cls._logger.debug(f'failed to get EDID for {monitor.InstanceName} - {format_exc(e)}')
                continue
            if name is not None:
                edid_names[uid] = name

        names = {}
        for handle, device in enum_display_devices():
            uid = device.DeviceID.split('#')[2]
            if uid in edid_names:
                names[handle] = edid_names[uid]
        return names

    @classmethod
    def get_physical_monitor_count(cls, handle: int) -> int:
        count = DWORD()
        if not windll.dxva2.GetNumberOfPhysicalMonitorsFromHMONITOR(HMONITOR(handle), byref(count)):
            raise VCPError(
                f'call to GetNumberOfPhysicalMonitorsFromHMONITOR failed - {format_exc(WinError())}')
        return count.value

    @classmethod
    def get_physical_monitors(cls, handle: int, count: int) -> List[PhysicalMonitor]:
        physical_array = (cls._PHYSICAL_MONITOR * count)()
        if not windll.dxva2.GetPhysicalMonitorsFromHMONITOR(HMONITOR(handle), count, physical_array):
            raise VCPError(
                f'call to GetPhysicalMonitorsFromHMONITOR failed - {format_exc(WinError())}')
        return [PhysicalMonitor(item.handle, item.description) for item in physical_array]

    @classmethod
    def destroy_physical_monitor(cls, physical: PhysicalMonitor) -> bool:
        if not physical.handle:
            return True
        return bool(windll.dxva2.DestroyPhysicalMonitor(HANDLE(physical.handle)))

    @classmethod
    def get_vcp_feature(cls, physical: PhysicalMonitor, code: VCPCode) -> Optional[int]:
        current = DWORD()
        maximum = DWORD()
        if windll.dxva2.GetVCPFeatureAndVCPFeatureReply(
            HANDLE(physical.handle), BYTE(code), None, byref(current), byref(maximum)
        ):
            cls._logger.debug(f'0x{code:02X} current: {current.value}, max: {maximum.value}')
            return current.value
        return None

    @classmethod
    def set_vcp_feature(cls, physical: PhysicalMonitor, code: VCPCode, value: int) -> bool:
        if windll.dxva2.SetVCPFeature(HANDLE(physical.handle), BYTE(code), DWORD(value)):
            return True
        cls._logger.info(f'SetVCPFeature 0x{code:02X} failed - {format_exc(WinError())}')
        return False

