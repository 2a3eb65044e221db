# === config.py (build-time switches) ===
# Bu değerler cihaza yüklenmeden önce ayarlanır; çalışırken değiştirilmez.

# 00 ve 11'de olay üret (çift çözünürlük). False: sadece 00.
HALF_STEP = False

# Dahili pull-up dirençleri (harici 4.7k–10k varsa False yapılabilir)
ENABLE_PULLUPS = True

# Hız hesabı (tık/saniye) ve ilgili alanlar
ENABLE_SPEED = True

# Hız örnekleme periyodu, ms. 1000'in tam böleni en iyisi (100, 200, 500, 1000)
DEFAULT_PERIOD = 500
MAX_PERIOD = 1000

# Ortak uç GND'de + pull-up: detent konumunda pinler 11 okur -> 00'a çevir
ACTIVE_LOW = True

# speed() uint16 gibi doyar
SPEED_MAX = 0xFFFF
