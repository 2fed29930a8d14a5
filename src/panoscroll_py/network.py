"""
Network utilities for Panoscroll
"""
from __future__ import annotations

from pathlib import Path
import socket

import qrcode
from qrcode.image.pil import PilImage


def get_ip_address(route_target: str = "10.254.254.254") -> str:
    """Address of the interface the phone reaches us on, loopback when offline.

    Connecting a UDP socket sends nothing; it only selects the outgoing route.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.settimeout(0)
        try:
            sock.connect((route_target, 1))
        except OSError:
            return "127.0.0.1"
        return sock.getsockname()[0]


def _qr_code(data: str, box_size: int = 15) -> qrcode.QRCode:
    qr = qrcode.QRCode(
        version=1,  # let it auto-expand
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=4,
        image_factory=PilImage,
    )
    qr.add_data(data)
    qr.make(fit=True)
    return qr


def generate_qr_code_image(data: str):
    """Generate a QR code PIL image from data"""
    img = _qr_code(data).make_image(fill_color="black", back_color="white")
    if img.mode != 'RGB':
        img = img.convert('RGB')
    return img


def save_qr_code(data: str, target: Path) -> Path:
    """Write the QR code as a PNG so it can be opened if the terminal cannot show it"""
    generate_qr_code_image(data).save(target, format='PNG')
    return target


def print_qr_code(data: str) -> None:
    """Show the QR code in the terminal for the phone to scan"""
    _qr_code(data, box_size=1).print_ascii(invert=True)
