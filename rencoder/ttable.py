# === ttable.py (quadrature state tables) ===
# Satırlar = durum, sütunlar = giriş kodu 00, 01, 10, 11 (bit1 = B, bit0 = A).
# Kodlar mantıksal: 00 = detent (dinlenme) konumu.
# Tablodaki değer = yeni durum; düşük nibble düğüm, 0x10/0x20 tamamlanan adım.

# ----------------- DIRECTION CODES -----------------
DIR_NONE = 0x00
DIR_CW = 0x10
DIR_CCW = 0x20
DIR_MASK = 0x30
STATE_MASK = 0x0F

R_START = 0x0

# ----------------- FULL-STEP (emit at 00 only) -----------------
R_CW_FINAL = 0x1
R_CW_BEGIN = 0x2
R_CW_NEXT = 0x3
R_CCW_BEGIN = 0x4
R_CCW_FINAL = 0x5
R_CCW_NEXT = 0x6

FULL_STEP_TABLE = (
    #      00                   01           10           11
    bytes((R_START,            R_CCW_BEGIN, R_CW_BEGIN,  R_START)),     # R_START
    bytes((R_START | DIR_CW,   R_CW_FINAL,  R_START,     R_CW_NEXT)),   # R_CW_FINAL
    bytes((R_START,            R_START,     R_CW_BEGIN,  R_CW_NEXT)),   # R_CW_BEGIN
    bytes((R_START,            R_CW_FINAL,  R_CW_BEGIN,  R_CW_NEXT)),   # R_CW_NEXT
    bytes((R_START,            R_CCW_BEGIN, R_START,     R_CCW_NEXT)),  # R_CCW_BEGIN
    bytes((R_START | DIR_CCW,  R_START,     R_CCW_FINAL, R_CCW_NEXT)),  # R_CCW_FINAL
    bytes((R_START,            R_CCW_BEGIN, R_CCW_FINAL, R_CCW_NEXT)),  # R_CCW_NEXT
)

FULL_STEP_NAMES = (
    "START", "CW_FINAL", "CW_BEGIN", "CW_NEXT",
    "CCW_BEGIN", "CCW_FINAL", "CCW_NEXT",
)

# ----------------- HALF-STEP (emit at 00 and 11) -----------------
R_HS_CCW_BEGIN = 0x1
R_HS_CW_BEGIN = 0x2
R_START_MID = 0x3
R_CW_BEGIN_MID = 0x4
R_CCW_BEGIN_MID = 0x5

HALF_STEP_TABLE = (
    #      00                  01               10               11
    bytes((R_START,           R_HS_CCW_BEGIN,  R_HS_CW_BEGIN,   R_START_MID)),            # R_START
    bytes((R_START,           R_HS_CCW_BEGIN,  R_START,         R_START_MID | DIR_CCW)),  # R_CCW_BEGIN
    bytes((R_START,           R_START,         R_HS_CW_BEGIN,   R_START_MID | DIR_CW)),   # R_CW_BEGIN
    bytes((R_START,           R_CW_BEGIN_MID,  R_CCW_BEGIN_MID, R_START_MID)),            # R_START_MID (11)
    bytes((R_START | DIR_CW,  R_CW_BEGIN_MID,  R_START_MID,     R_START_MID)),            # R_CW_BEGIN_MID
    bytes((R_START | DIR_CCW, R_START_MID,     R_CCW_BEGIN_MID, R_START_MID)),            # R_CCW_BEGIN_MID
)

HALF_STEP_NAMES = (
    "START", "CCW_BEGIN", "CW_BEGIN",
    "START_MID", "CW_BEGIN_MID", "CCW_BEGIN_MID",
)


def table_for(half_step):
    """Return the shared, read-only table for the chosen resolution."""
    return HALF_STEP_TABLE if half_step else FULL_STEP_TABLE


def state_name(state, half_step=False):
    """'CW_NEXT', 'START|CW' ... for debug output."""
    names = HALF_STEP_NAMES if half_step else FULL_STEP_NAMES
    node = state & STATE_MASK
    name = names[node] if node < len(names) else "?%d" % node
    d = state & DIR_MASK
    if d == DIR_CW:
        name += "|CW"
    elif d == DIR_CCW:
        name += "|CCW"
    return name
