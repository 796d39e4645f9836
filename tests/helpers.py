from monitor_input_control.helpers import Monitor

from .mocks.fake_method import FakeVCP


def fake_edid(name=None, serial='SERIAL1') -> bytes:
    '''Build a 128 byte EDID base block carrying an optional serial and name descriptor'''
    edid = bytearray(128)
    edid[0:8] = bytes.fromhex('00 ff ff ff ff ff ff 00')
    if serial is not None:
        edid[54:72] = bytes.fromhex('00 00 00 ff 00') + (serial.encode() + b'\n').ljust(13, b' ')[:13]
    if name is not None:
        edid[72:90] = bytes.fromhex('00 00 00 fc 00') + (name.encode() + b'\n').ljust(13, b' ')[:13]
    return bytes(edid)


def make_monitor(name='Monitor', x=0, y=0, handle=101, width=1920, height=1080) -> Monitor:
    return Monitor(handle=handle, method=FakeVCP, name=name, x=x, y=y, width=width, height=height)
