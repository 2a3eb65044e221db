# === decoder.py (state machine + speed window) ===
from rencoder import config
from rencoder.ttable import (
    DIR_NONE, DIR_MASK, STATE_MASK, R_START, table_for,
)


class Decoder:
    """Debounced quadrature decoder.

    Feed one 2-bit code per call to step(); the return value is DIR_NONE,
    DIR_CW or DIR_CCW. Bounce only moves between sub-states, a direction is
    returned once the whole legal sequence has been seen.
    """

    def __init__(self, half_step=config.HALF_STEP):
        self.half_step = bool(half_step)
        self._table = table_for(self.half_step)
        self._state = R_START

    @property
    def state(self):
        return self._state

    def reset(self):
        self._state = R_START

    def step(self, code):
        node = self._state & STATE_MASK
        if code & ~0b11 or node >= len(self._table):
            # Geçersiz giriş: başa dön, olay yok
            self._state = R_START
            return DIR_NONE
        self._state = self._table[node][code]
        return self._state & DIR_MASK


def _ticks_sub(new, old):
    return new - old


class SpeedDecoder(Decoder):
    """Decoder that also counts clicks over a fixed window.

    clock() must return milliseconds (time.ticks_ms on MicroPython) and
    ticks_diff(new, old) the elapsed time between two readings; pass
    time.ticks_diff on the device so a wrapped clock is handled there.
    The window is not sliding: every `period` ms the click count is turned
    into clicks/second and cleared.
    """

    def __init__(self, clock, half_step=config.HALF_STEP, period=config.DEFAULT_PERIOD, ticks_diff=None):
        super().__init__(half_step)
        self._clock = clock
        self._ticks_diff = ticks_diff if ticks_diff is not None else _ticks_sub
        self._period = config.DEFAULT_PERIOD
        self._count = 0
        self._spd = 0
        self._time_last = clock()
        self.set_period(period)

    @property
    def period(self):
        return self._period

    def set_period(self, period_ms):
        """0 < period_ms <= 1000, otherwise the old period silently stays."""
        if isinstance(period_ms, int) and 0 < period_ms <= config.MAX_PERIOD:
            self._period = period_ms
            return True
        return False

    def speed(self):
        return self._spd

    def step(self, code):
        d = super().step(code)
        if d:
            self._count += 1
        self.refresh_speed()
        return d

    def refresh_speed(self):
        # ticks_diff: pencere içinde tek bir sarma zararsız
        now = self._clock()
        if self._ticks_diff(now, self._time_last) >= self._period:
            spd = self._count * (1000 // self._period)
            self._spd = spd if spd < config.SPEED_MAX else config.SPEED_MAX
            self._time_last = now
            self._count = 0


def make_decoder(clock=None, ticks_diff=None):
    """Decoder for the configured build: resolution and speed from config."""
    if config.ENABLE_SPEED:
        if clock is None:
            raise ValueError("speed tracking needs a millisecond clock")
        return SpeedDecoder(clock, config.HALF_STEP, config.DEFAULT_PERIOD, ticks_diff)
    return Decoder(config.HALF_STEP)
