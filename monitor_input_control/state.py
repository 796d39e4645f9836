'''
Persistence of the last applied input source between invocations.
'''
import logging
import os
import tempfile
from typing import Optional

from . import config
from .exceptions import format_exc

_logger = logging.getLogger(__name__)


class ToggleStateStore():
    '''
    Stores a single line of text (the name of the last applied input source) in a file.

    The state is advisory. A missing or unreadable file reads as "unknown" and
    a failed write is logged rather than raised.
    '''
    def __init__(self, path: Optional[str] = None):
        self.path = config.STATE_FILE if path is None else path
        self._logger = _logger.getChild(self.__class__.__name__)

    def load(self) -> Optional[str]:
        '''
        Returns:
            The stored value, or None if there is no usable stored value
        '''
        try:
            with open(self.path, 'r', encoding='utf-8-sig') as f:
                value = f.readline().strip()
        except FileNotFoundError:
            self._logger.debug(f'no state file at {self.path!r}')
            return None
        except (OSError, UnicodeDecodeError) as e:
            self._logger.warning(f'could not read state file {self.path!r} - {format_exc(e)}')
            return None

        if not value:
            return None
        self._logger.info(f'last input was: {value}')
        return value

    def save(self, value: str) -> bool:
        '''
        Overwrite the stored value, creating the containing directory if needed.

        Returns:
            Whether the value was saved
        '''
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.state-', suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write(value)
                os.replace(tmp_path, self.path)
            except BaseException:
                os.unlink(tmp_path)
                raise
        except OSError as e:
            self._logger.warning(f'could not save state to {self.path!r} - {format_exc(e)}')
            return False

        self._logger.info(f'saved state: {value}')
        return True
