'''
Timed, multi-step effects built on top of `.channel`.

Once an effect has started, every remaining step is attempted even if an
earlier one failed. A failed step is logged and never retried.
'''
import logging
import time
from typing import Dict, List, NamedTuple, Optional, Tuple

from .channel import get_vcp, set_vcp
from .exceptions import format_exc
from .helpers import (BLUE_GAIN, BRIGHTNESS, CONTRAST, GREEN_GAIN,
                      POWER_CONTROL, POWER_STATES, RED_GAIN, Monitor,
                      VCP_SETTINGS, fade_range)
from .types import VCPCode

_logger = logging.getLogger(__name__)

FADE_HOLD: float = 1.0
'''Seconds to stay at 0 between fading out and fading back in'''
BLACKOUT_SETTLE: float = 0.1
'''Seconds to wait after each write during a blackout'''
BLACKOUT_HOLD: float = 5.0
'''Seconds the display is kept in standby during a blackout'''
BLACKOUT_WAKE: float = 2.0
'''Seconds to give the display to wake up before restoring settings'''

BLACKOUT_SETTINGS: Tuple[Tuple[str, VCPCode], ...] = (
    ('BRIGHTNESS', BRIGHTNESS),
    ('CONTRAST', CONTRAST),
    ('RED_GAIN', RED_GAIN),
    ('GREEN_GAIN', GREEN_GAIN),
    ('BLUE_GAIN', BLUE_GAIN),
)
'''The settings zeroed by a blackout, in the order they are zeroed and restored'''


class EffectStep(NamedTuple):
    name: str
    code: VCPCode
    value: int
    delay: float = 0


class EffectPlan(NamedTuple):
    '''The ordered steps of a single effect run and the values it should leave behind'''
    steps: List[EffectStep]
    snapshot: Optional[Dict[str, int]] = None
    '''Setting names (keys of `.helpers.VCP_SETTINGS`) and the values written back, in order, after `steps`'''
    restore_delay: float = 0

    def restore_steps(self) -> List[EffectStep]:
        '''The steps that write `snapshot` back'''
        if not self.snapshot:
            return []
        return [
            EffectStep(name, VCP_SETTINGS[name].code, value, self.restore_delay)
            for name, value in self.snapshot.items()
        ]


def run_plan(monitor: Monitor, plan: EffectPlan) -> int:
    '''
    Execute each step of a plan in order, then restore its snapshot,
    sleeping after each write.

    Returns:
        The number of steps that failed
    '''
    failures = 0
    for step in plan.steps + plan.restore_steps():
        try:
            ok = set_vcp(monitor, step.code, step.value)
        except Exception as e:
            _logger.error(f'step {step.name}={step.value} raised - {format_exc(e)}')
            ok = False
        if not ok:
            failures += 1
            _logger.warning(f'failed to set {step.name} to {step.value}, continuing')
        if step.delay > 0:
            time.sleep(step.delay)
    return failures


def fade_plan(original: int, steps: int, step_delay: float, hold: float,
              code: VCPCode = BRIGHTNESS, name: str = 'BRIGHTNESS') -> EffectPlan:
    '''Build the steps for `fade_and_restore`'''
    down = [EffectStep(name, code, value, step_delay) for value in fade_range(original, steps)]
    up = [EffectStep(name, code, value, step_delay) for value in fade_range(original, steps, down=False)]
    # hold at 0 before fading back in
    down[-1] = down[-1]._replace(delay=step_delay + hold)
    return EffectPlan(down + up)


def fade_and_restore(
    monitor: Monitor,
    step_delay: float = 0.05,
    steps: int = 20,
    code: VCPCode = BRIGHTNESS,
    hold: Optional[float] = None
) -> bool:
    '''
    Fade a setting linearly down to 0, hold, then fade it back to where it started.

    Args:
        monitor: the display to fade
        step_delay: seconds to wait after each step
        steps: how many steps to take in each direction
        code: the setting to fade. Defaults to brightness
        hold: seconds to stay at 0. Defaults to `FADE_HOLD`

    Returns:
        False if the starting value could not be read, in which case nothing was changed.
        Otherwise True, even if some steps failed
    '''
    original = get_vcp(monitor, code)
    if original is None:
        _logger.error(f'could not read 0x{code:02X} on {monitor.name!r}, not fading')
        return False

    hold = FADE_HOLD if hold is None else hold
    plan = fade_plan(original, steps, step_delay, hold, code=code, name=f'0x{code:02X}')
    _logger.info(f'fading 0x{code:02X} {original} -> 0 -> {original} in {max(1, steps)} steps')

    failures = run_plan(monitor, plan)
    if failures:
        _logger.warning(f'fade finished with {failures} failed step(s)')
    return True


def take_snapshot(monitor: Monitor) -> Dict[str, int]:
    '''Read every setting in `BLACKOUT_SETTINGS`, leaving out any that do not answer'''
    snapshot = {}
    for name, code in BLACKOUT_SETTINGS:
        value = get_vcp(monitor, code)
        if value is None:
            _logger.warning(f'could not read {name}, it will not be changed')
            continue
        snapshot[name] = value
    return snapshot


def blackout_plan(snapshot: Dict[str, int], settle: float, hold: float, wake: float) -> EffectPlan:
    '''Build the steps for `blackout`: zero, standby and wake, with the captured values restored afterwards'''
    codes = dict(BLACKOUT_SETTINGS)
    order = [name for name, _ in BLACKOUT_SETTINGS if name in snapshot]

    steps = [EffectStep(name, codes[name], 0, settle) for name in order]
    steps.append(EffectStep('POWER_CONTROL', POWER_CONTROL, POWER_STATES['STANDBY'], hold))
    steps.append(EffectStep('POWER_CONTROL', POWER_CONTROL, POWER_STATES['ON'], wake))
    return EffectPlan(steps, {name: snapshot[name] for name in order}, settle)


def blackout(
    monitor: Monitor,
    settle: Optional[float] = None,
    hold: Optional[float] = None,
    wake: Optional[float] = None
) -> bool:
    '''
    Black the display out completely for a few seconds, then put everything back.

    Brightness, contrast and the colour gains are captured and zeroed, the display
    is put into standby, woken again and finally the captured values are restored
    in the order they were zeroed.

    Args:
        monitor: the display to black out
        settle: seconds to wait after each write. Defaults to `BLACKOUT_SETTLE`
        hold: seconds to stay in standby. Defaults to `BLACKOUT_HOLD`
        wake: seconds to wait for the display to wake. Defaults to `BLACKOUT_WAKE`

    Returns:
        False if the brightness could not be read, in which case nothing was changed.
        Otherwise True, even if some steps failed
    '''
    snapshot = take_snapshot(monitor)
    if 'BRIGHTNESS' not in snapshot:
        _logger.error(f'could not read brightness on {monitor.name!r}, not blacking out')
        return False

    power = get_vcp(monitor, POWER_CONTROL)
    _logger.info(f'blackout snapshot: {snapshot}, power state: {power}')

    plan = blackout_plan(
        snapshot,
        BLACKOUT_SETTLE if settle is None else settle,
        BLACKOUT_HOLD if hold is None else hold,
        BLACKOUT_WAKE if wake is None else wake
    )
    failures = run_plan(monitor, plan)
    if failures:
        _logger.warning(f'blackout finished with {failures} failed step(s)')
    else:
        _logger.info('blackout complete, settings restored')
    return True
