import unittest

from rencoder import config
from rencoder.encoder import RotaryEncoder
from rencoder.decoder import Decoder, SpeedDecoder
from rencoder.ttable import DIR_NONE, DIR_CW, DIR_CCW


class FakePin:
    """machine.Pin yerine: değer testten ayarlanır, irq kaydedilir."""
    IN = 1
    PULL_UP = 1
    IRQ_RISING = 4
    IRQ_FALLING = 8

    created = []

    def __init__(self, pin_id, mode, pull=None):
        self.id = pin_id
        self.mode = mode
        self.pull = pull
        self.level = 1 if pull == FakePin.PULL_UP else 0
        self.irq_args = None
        FakePin.created.append(self)

    def value(self):
        return self.level

    def irq(self, trigger=None, handler=None, hard=False):
        self.irq_args = (trigger, handler, hard)


class TestRotaryEncoder(unittest.TestCase):
    def setUp(self):
        self._saved = (config.ENABLE_PULLUPS, config.ACTIVE_LOW,
                       config.ENABLE_SPEED, config.HALF_STEP)
        config.ENABLE_PULLUPS, config.ACTIVE_LOW = True, True
        config.ENABLE_SPEED, config.HALF_STEP = True, False
        FakePin.created = []
        self.now = 0
        self.enc = RotaryEncoder(12, 13, pin_factory=FakePin, clock=lambda: self.now)
        self.enc.begin()
        self.a, self.b = FakePin.created

    def tearDown(self):
        (config.ENABLE_PULLUPS, config.ACTIVE_LOW,
         config.ENABLE_SPEED, config.HALF_STEP) = self._saved

    def set_raw(self, b, a):
        self.b.level, self.a.level = b, a

    def test_begin_configures_inputs_with_pullups(self):
        self.assertEqual((self.a.id, self.b.id), (12, 13))
        for pin in (self.a, self.b):
            self.assertEqual(pin.mode, FakePin.IN)
            self.assertEqual(pin.pull, FakePin.PULL_UP)
        self.assertIsInstance(self.enc.decoder, SpeedDecoder)

    def test_begin_without_pullups(self):
        config.ENABLE_PULLUPS = False
        FakePin.created = []
        enc = RotaryEncoder(2, 3, pin_factory=FakePin, clock=lambda: 0)
        enc.begin()
        self.assertEqual([p.pull for p in FakePin.created], [None, None])

    def test_active_low_detent_reads_as_00(self):
        self.set_raw(1, 1)
        self.assertEqual(self.enc.sample(), 0b00)
        self.set_raw(0, 1)  # B kapalı
        self.assertEqual(self.enc.sample(), 0b10)

    def test_active_high_is_not_inverted(self):
        config.ACTIVE_LOW = False
        self.set_raw(1, 0)
        self.assertEqual(self.enc.sample(), 0b10)

    def test_clockwise_click_from_raw_pins(self):
        # ham seviyeler (B, A): 11 -> 01 -> 00 -> 10 -> 11
        out = []
        for b, a in ((1, 1), (0, 1), (0, 0), (1, 0), (1, 1)):
            self.set_raw(b, a)
            out.append(self.enc.read())
        self.assertEqual(out, [DIR_NONE] * 4 + [DIR_CW])

    def test_counter_clockwise_click_from_raw_pins(self):
        out = []
        for b, a in ((1, 1), (1, 0), (0, 0), (0, 1), (1, 1)):
            self.set_raw(b, a)
            out.append(self.enc.read(self.a))
        self.assertEqual(out[-1], DIR_CCW)
        self.assertEqual(out.count(DIR_NONE), 4)

    def test_irq_attaches_both_edges_on_both_pins(self):
        self.enc.irq()
        for pin in (self.a, self.b):
            trigger, handler, hard = pin.irq_args
            self.assertEqual(trigger, FakePin.IRQ_RISING | FakePin.IRQ_FALLING)
            self.assertEqual(handler, self.enc.read)
            self.assertTrue(hard)

    def test_irq_custom_handler(self):
        def handler(pin):
            pass
        self.enc.irq(handler, hard=False)
        self.assertIs(self.a.irq_args[1], handler)
        self.assertFalse(self.b.irq_args[2])

    def test_speed_pass_through(self):
        self.assertFalse(self.enc.set_period(0))
        self.assertTrue(self.enc.set_period(250))
        for b, a in ((0, 1), (0, 0), (1, 0), (1, 1)):
            self.set_raw(b, a)
            self.enc.read()
        self.now = 250
        self.enc.refresh_speed()
        self.assertEqual(self.enc.speed(), 4)

    def test_begin_again_restarts_same_decoder(self):
        dec = self.enc.decoder
        self.set_raw(0, 1)
        self.enc.read()
        self.assertNotEqual(dec.state, 0)
        self.enc.begin()
        self.assertIs(self.enc.decoder, dec)
        self.assertEqual(dec.state, 0)

    def test_ticks_diff_reaches_decoder(self):
        calls = []

        def ticks_diff(new, old):
            calls.append((new, old))
            return new - old

        FakePin.created = []
        enc = RotaryEncoder(2, 3, pin_factory=FakePin, clock=lambda: 5, ticks_diff=ticks_diff)
        enc.begin()
        enc.refresh_speed()
        self.assertEqual(calls, [(5, 5)])

    def test_without_speed_tracking(self):
        config.ENABLE_SPEED = False
        FakePin.created = []
        enc = RotaryEncoder(2, 3, pin_factory=FakePin)
        enc.begin()
        self.assertIs(type(enc.decoder), Decoder)
        self.assertEqual(enc.speed(), 0)
        self.assertFalse(enc.set_period(250))
        enc.refresh_speed()


if __name__ == '__main__':
    unittest.main()
