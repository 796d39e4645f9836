def format_exc(e: Exception) -> str:
    '''@private'''
    return f'{type(e).__name__}: {e}'


class MonitorControlError(Exception):
    '''
    Generic error class designed to make catching errors under one umbrella easy.
    '''
    ...


class NoValidDisplayError(MonitorControlError, LookupError):
    '''No displays were detected at all'''
    ...


class DisplayNotFoundError(MonitorControlError, LookupError):
    '''Displays were detected but none matched the targeting mode'''
    ...


class UnrecognizedSettingError(MonitorControlError, ValueError):
    '''
    A setting or input source name is not present in the lookup tables.

    Example:
        ```python
        raise UnrecognizedSettingError('HDMI9', ('HDMI1', 'HDMI2'), kind='input source')
        # UnrecognizedSettingError: invalid input source 'HDMI9', must be one of: HDMI1, HDMI2
        ```
    '''
    def __init__(self, name: str, valid: tuple, kind: str = 'setting'):
        self.name = name
        self.valid = tuple(valid)
        super().__init__(f'invalid {kind} {name!r}, must be one of: {", ".join(self.valid)}')


class VCPError(MonitorControlError):
    '''A call into the display-control API failed'''
    ...


class EDIDParseError(MonitorControlError):
    '''Unparsable/invalid EDID'''
    ...
