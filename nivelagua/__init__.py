"""Water tank level controller: pump and alarm logic, OLED and LED matrix rendering, and a web status server."""

__version__ = "0.1.0"
__all__ = ["font", "ssd1306", "ws2812", "controller", "webserver"]