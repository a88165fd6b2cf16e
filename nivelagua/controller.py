"""Water-level control logic: pump hysteresis, alarm buzzer, buttons and display."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from .ssd1306 import SSD1306
from .ws2812 import level_frame

LIM_MIN_DEFAULT = 30.0
LIM_MAX_DEFAULT = 70.0
DEBOUNCE_MS = 200

BUTTON_A = 5
BUTTON_B = 6

ADC_MAX = 4095

PWM_WRAP = 2500
BUZZER_ON_LEVEL = 1250
BUZZER_OFF_LEVEL = 0

_U32_MASK = 0xFFFFFFFF


def level_from_adc(adc_value: int) -> float:
    """Convert a 12-bit ADC reading into a water level in percent."""
    if not 0 <= adc_value <= ADC_MAX:
        raise ValueError(f"ADC value {adc_value} outside 0..{ADC_MAX}")
    return (adc_value * 100.0) / ADC_MAX


@dataclass(frozen=True)
class StepResult:
    """Outputs of one pass of the control loop."""

    adc_value: int
    level: float
    pump_on: bool
    frame: tuple[int, ...]
    buzzer_level: int

    @property
    def relay_level(self) -> int:
        """GPIO level driven on the relay pin; the relay is active low."""
        return 0 if self.pump_on else 1


class WaterLevelController:
    """State of the water-level controller shared by the loop and the web server."""

    def __init__(self) -> None:
        self.lim_min = LIM_MIN_DEFAULT
        self.lim_max = LIM_MAX_DEFAULT
        self.level = 0.0
        self.pump_on = False
        self.reset_requested = False
        self.bootloader_requested = False
        self._last_press_a = 0
        self._buzzer_counter = 0
        self._lock = threading.RLock()

    def set_limits(self, lim_min: float, lim_max: float) -> None:
        """Replace the lower and upper pump limits."""
        with self._lock:
            self.lim_min = float(lim_min)
            self.lim_max = float(lim_max)

    def reset_limits(self) -> None:
        """Restore the default limits and clear any pending reset request."""
        with self._lock:
            self.lim_min = LIM_MIN_DEFAULT
            self.lim_max = LIM_MAX_DEFAULT
            self.reset_requested = False

    def on_button(self, gpio: int, now_ms: int) -> bool:
        """Handle a falling edge on a button; return whether it was acted upon."""
        now = now_ms & _U32_MASK
        with self._lock:
            if gpio == BUTTON_B:
                self.bootloader_requested = True
                return True
            if gpio == BUTTON_A and ((now - self._last_press_a) & _U32_MASK) > DEBOUNCE_MS:
                self.reset_requested = True
                self._last_press_a = now
                return True
            return False

    def control_pump(self, level: float) -> bool:
        """Switch the pump on below the lower limit, off above the upper one."""
        with self._lock:
            if level < self.lim_min and not self.pump_on:
                self.pump_on = True
            elif level > self.lim_max and self.pump_on:
                self.pump_on = False
            return self.pump_on

    def buzzer_duty(self, level: float) -> int:
        """Return the PWM level for the buzzer, beeping while out of limits."""
        with self._lock:
            self._buzzer_counter += 1
            if level < self.lim_min or level > self.lim_max:
                if self._buzzer_counter % 4 < 2:
                    return BUZZER_ON_LEVEL
                return BUZZER_OFF_LEVEL
            return BUZZER_OFF_LEVEL

    def display_lines(self, adc_value: int) -> list[tuple[str, int, int]]:
        """Return the (text, x, y) lines shown on the OLED display."""
        with self._lock:
            level = self.level
            pump_on = self.pump_on
        return [
            ("Nivel de Agua:", 8, 6),
            (f"{level:.0f}%", 8, 22),
            (f"ADC: {adc_value}", 8, 41),
            ("Bomba: LIGADA" if pump_on else "Bomba: DESLIGADA", 8, 52),
        ]

    def render_display(self, display: SSD1306, adc_value: int) -> None:
        """Redraw the status screen on ``display`` and send it."""
        display.fill(False)
        for text, x, y in self.display_lines(adc_value):
            display.draw_string(text, x, y)
        display.send_data()

    def step(self, adc_value: int) -> StepResult:
        """Run one control-loop pass for a new ADC reading."""
        with self._lock:
            if self.reset_requested:
                self.reset_limits()
            self.level = level_from_adc(adc_value)
            pump_on = self.control_pump(self.level)
            frame = tuple(level_frame(self.level))
            buzzer = self.buzzer_duty(self.level)
            return StepResult(adc_value, self.level, pump_on, frame, buzzer)