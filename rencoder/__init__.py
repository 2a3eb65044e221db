from rencoder.ttable import DIR_NONE, DIR_CW, DIR_CCW
from rencoder.decoder import Decoder, SpeedDecoder, make_decoder
from rencoder.encoder import RotaryEncoder

__version__ = "1.0.0"
