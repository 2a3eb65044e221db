# === encoder.py (pin wrapper, MicroPython) ===
from rencoder import config
from rencoder.decoder import SpeedDecoder, make_decoder


class RotaryEncoder:
    """Rotary encoder on two GPIO pins.

    pin_a / pin_b are whatever the pin factory accepts (GPIO numbers on the
    Pico). Call begin() once, then read() from the main loop or from a pin
    IRQ; each call returns DIR_NONE, DIR_CW or DIR_CCW.
    """

    def __init__(self, pin_a, pin_b, pin_factory=None, clock=None, ticks_diff=None):
        self.pin_a = pin_a
        self.pin_b = pin_b
        self._pin_factory = pin_factory
        self._clock = clock
        self._ticks_diff = ticks_diff
        self._a = None
        self._b = None
        self._pin_cls = None
        self.decoder = None

    def begin(self):
        Pin = self._pin_factory
        if Pin is None:
            from machine import Pin
            import time
            # cihazda: ticks_ms sarar, fark her zaman ticks_diff ile
            if self._clock is None:
                self._clock = time.ticks_ms
            if self._ticks_diff is None:
                self._ticks_diff = time.ticks_diff

        pull = Pin.PULL_UP if config.ENABLE_PULLUPS else None
        self._a = Pin(self.pin_a, Pin.IN, pull)
        self._b = Pin(self.pin_b, Pin.IN, pull)
        self._pin_cls = Pin
        if self.decoder is None:
            self.decoder = make_decoder(self._clock, self._ticks_diff)
        else:
            # yeniden begin(): aynı decoder, START'tan başla
            self.decoder.reset()

    def sample(self):
        code = (self._b.value() << 1) | self._a.value()
        if config.ACTIVE_LOW:
            code ^= 0b11
        return code

    def read(self, pin=None):
        # pin: IRQ handler imzası için; kullanılmıyor
        return self.decoder.step(self.sample())

    def irq(self, handler=None, hard=True):
        """A ve B, yükselen + düşen kenar."""
        Pin = self._pin_cls
        if handler is None:
            handler = self.read
        trig = Pin.IRQ_RISING | Pin.IRQ_FALLING
        self._a.irq(trigger=trig, handler=handler, hard=hard)
        self._b.irq(trigger=trig, handler=handler, hard=hard)

    # ----------------- SPEED -----------------
    def set_period(self, period_ms):
        if isinstance(self.decoder, SpeedDecoder):
            return self.decoder.set_period(period_ms)
        return False

    def speed(self):
        if isinstance(self.decoder, SpeedDecoder):
            return self.decoder.speed()
        return 0

    def refresh_speed(self):
        if isinstance(self.decoder, SpeedDecoder):
            self.decoder.refresh_speed()
