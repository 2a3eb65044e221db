# === main.py (USB-CDC + rotary encoder, "position,speed" raporu) ===
# rencoder/ klasörünü Pico'ya /lib/rencoder olarak kopyalayın.
from machine import Pin
import machine, micropython, time, sys, uselect

from rencoder import RotaryEncoder, DIR_CW, DIR_CCW
from rencoder.ttable import state_name

micropython.alloc_emergency_exception_buf(128)

# ----------------- LOG -----------------
LOG_LEVEL = 1  # 0=ERROR, 1=INFO, 2=DEBUG
ERR, INF, DBG = 0, 1, 2

def log(level, msg, *args):
    # '#' ile başlar: köprü bu satırları rapor sanmaz
    if level <= LOG_LEVEL:
        sys.stdout.write("# [{}] {:>8d}ms | {}\r\n".format(
            ("ERR", "INF", "DBG")[level], time.ticks_ms(), msg % args if args else msg))

# ----------------- ENCODER PINS & POWER -----------------
ENC_A = 12
ENC_B = 13
USE_IRQ = True        # False: ana döngüde polling

# Harici 4.7k–10k pull-up önerilir (open-collector için şart)
encoder_vcc = Pin(14, Pin.OUT)
encoder_vcc.high()

# ----------------- ENCODER STATE -----------------
pos = 0
enc = RotaryEncoder(ENC_A, ENC_B)
enc.begin()

def enc_isr(pin):
    global pos
    d = enc.read()
    if d == DIR_CW:
        pos += 1
    elif d == DIR_CCW:
        pos -= 1

if USE_IRQ:
    enc.irq(enc_isr)

log(INF, "encoder A=%d B=%d irq=%s half=%s", ENC_A, ENC_B, USE_IRQ, enc.decoder.half_step)
log(DBG, "state=%s", state_name(enc.decoder.state, enc.decoder.half_step))

def snapshot():
    # IRQ kapalıyken oku: pos ve hız tutarlı olsun
    st = machine.disable_irq()
    enc.refresh_speed()
    p = pos
    s = enc.speed()
    machine.enable_irq(st)
    return p, s

def handle_command(line):
    """'period,<ms>' -> örnekleme periyodu"""
    name, val = line.split(',', 1)
    if name.strip() == "period":
        ms = int(val)
        if enc.set_period(ms):
            log(INF, "period=%dms", ms)
        else:
            log(DBG, "period %d reddedildi", ms)

# ----------------- USB-CDC I/O -----------------
poll = uselect.poll()
poll.register(sys.stdin, uselect.POLLIN)

last = time.ticks_ms()

while True:
    # --- USB-CDC'den komut oku ---
    if poll.poll(0):  # non-blocking
        line = sys.stdin.readline()
        if line:
            try:
                line = line.strip()  # \r\n temizler
                if (',' in line) and line:
                    handle_command(line)
            except Exception:
                # format hatalarını sessizce yut
                pass

    if not USE_IRQ:
        enc_isr(None)

    # --- 100 Hz encoder raporu: "position,speed" ---
    now = time.ticks_ms()
    if time.ticks_diff(now, last) >= 10:
        try:
            p, s = snapshot()
            sys.stdout.write(f"{p},{s}\r\n")
            if hasattr(sys.stdout, "flush"):
                sys.stdout.flush()
        except Exception:
            pass
        last = now

    if USE_IRQ:
        time.sleep_ms(1)
