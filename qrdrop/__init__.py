"""
qrdrop - ephemeral file sharing with QR-coded, time-limited download links.
"""

__version__ = "1.0.0"
