import numpy as np
import zxingcpp

QUIET_ZONE = 4
MODULE_SCALE = 4


class QRDecodeError(Exception):
    pass


def render_matrix(
    qr: np.ndarray, scale: int = MODULE_SCALE, quiet_zone: int = QUIET_ZONE
) -> np.ndarray:
    """Render a QR bit matrix as a grayscale image that zxing can scan.

    Dark modules become black pixels, and the symbol is surrounded by a white
    quiet zone of ``quiet_zone`` modules. Each module is ``scale`` pixels wide.
    """
    padded = np.pad(np.asarray(qr, dtype=bool), quiet_zone, constant_values=False)
    pixels = np.where(padded, 0, 255).astype(np.uint8)
    return np.kron(pixels, np.ones((scale, scale), dtype=np.uint8))


def decode_matrix(qr: np.ndarray) -> str:
    image = render_matrix(qr)
    results = zxingcpp.read_barcodes(image, formats=zxingcpp.BarcodeFormat.QRCode)
    if not results:
        raise QRDecodeError(f"unable to decode {len(qr)}x{len(qr)} QR matrix")
    return results[0].text
