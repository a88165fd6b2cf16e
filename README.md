# nivelagua

A water tank level controller. It turns a 12-bit ADC reading (0 to 4095) into
a fill level in percent. It switches a pump on when the level falls below a
minimum limit and off when the level rises above a maximum limit. It also sounds
an intermittent alarm while the level is outside those limits. The package renders
the status for a 128x64 SSD1306 OLED and a 5x5 WS2812 LED matrix. It also serves
a small web page that shows the level and lets you change the limits.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

### `nivelagua.font`

`glyph(char)` returns the eight column bytes of the 8x8 bitmap for one character.
In each byte, bit 0 is the top row. Characters outside printable ASCII (space
through `~`) come back as a space. Anything that is not a single character
raises `ValueError`.

### `nivelagua.ssd1306`

`SSD1306(width, height, external_vcc, address, write)` is a framebuffer for the
OLED controller in vertical addressing mode. All bus traffic goes through
`write(address, data)`, a callable that you supply.

- `config()` sends the power-up command sequence.
- `command(byte)` sends a single command.
- `send_data()` sets the column and page window and writes the whole buffer.

Drawing only changes the buffer:

- `pixel(x, y, value)` and `get_pixel(x, y)` set and read one pixel.
- The shape methods are `fill(value)`, `rect(top, left, width, height, value, fill)`,
  `line(x0, y0, x1, y1, value)`, `hline(x0, x1, y, value)` and
  `vline(x, y0, y1, value)`.
- `draw_char(c, x, y)` and `draw_string(text, x, y)` draw text. `draw_string`
  wraps to the next row and stops at the bottom edge.

A pixel outside the display raises `IndexError`. `Command` is an `IntEnum` of
the controller's command bytes.

### `nivelagua.ws2812`

- `urgb_u32(r, g, b)` packs 8-bit channels as a GRB word. It raises
  `ValueError` when a channel is out of range.
- `fifo_word(pixel_grb)` returns the 32-bit word that is pushed for one pixel.
- `level_frame(level)` returns the 25 pixel colours that show a level:
  - 20–30 %: 5 red LEDs
  - 31–39 %: 5 blue LEDs
  - 40–59 %: 10 blue LEDs
  - 60–70 %: 15 blue LEDs
  - 71–79 %: 15 red LEDs
  - 80–99 %: 20 red LEDs
  - 100 % and above: all 25 red
  - any other level: all LEDs off
- `clock_divider(sys_hz, freq)` returns the state-machine clock divider. The
  frequency must be positive.

### `nivelagua.controller`

`level_from_adc(adc_value)` converts a reading to percent. It raises
`ValueError` outside 0..4095.

`WaterLevelController` holds the limits, the current level and the pump state.
The limits default to 30 % and 70 %. Its methods are thread-safe.

- `set_limits(lim_min, lim_max)` replaces the limits, and `reset_limits()`
  restores the defaults.
- `on_button(gpio, now_ms)` handles a button press and returns whether the press
  was acted upon:
  - Button A is GPIO 5. A press requests a limit reset, with a 200 ms debounce.
    The reset is applied on the next `step`.
  - Button B is GPIO 6. A press sets `bootloader_requested`.
- `control_pump(level)` applies the hysteresis and returns the pump state.
- `buzzer_duty(level)` returns the PWM level for the buzzer, with a wrap of
  2500. While the level is out of limits, it returns 1250 on two of every four
  calls and 0 on the others. Within the limits it always returns 0.
- `display_lines(adc_value)` returns the `(text, x, y)` lines of the status
  screen.
- `render_display(display, adc_value)` draws those lines on an `SSD1306` and
  sends the frame.
- `step(adc_value)` runs one control cycle and returns a frozen `StepResult`.
  The result holds `adc_value`, `level`, `pump_on`, `frame` and `buzzer_level`.
  Its `relay_level` property is 0 while the pump runs, because the relay is
  active low.

### `nivelagua.webserver`

`handle_request(request, controller)` answers one raw HTTP request (bytes or
str) with the complete response bytes. The routes are:

- `GET /limites?min=..&max=..`: when both `min=` and `max=` are present, this
  sets new limits. A value that does not parse keeps the old limit. The response
  is `302` to `/`.
- `GET /estado`: returns JSON such as `{"nivel":24.4,"bomba":true}`.
- Anything else: returns the HTML status page.

`make_server(controller, host="0.0.0.0", port=80)` returns a bound, threading
`socketserver` server.

## Example

```python
from nivelagua.controller import WaterLevelController
from nivelagua.ssd1306 import SSD1306

controller = WaterLevelController()
result = controller.step(1000)      # about 24 % full: the pump switches on
print(result.level, result.pump_on, result.relay_level)

writes = []
display = SSD1306(128, 64, False, 0x3C, lambda address, data: writes.append(data))
controller.render_display(display, 1000)   # draws the screen and sends it
```

## Command

```
nivelagua --host 127.0.0.1 --port 8080
```

The defaults are host `0.0.0.0` and port `80`. The command starts the web
server in the background. It then reads ADC readings from standard input, one
integer per line. It runs a control step for each reading and prints the
reading, the level and the pump state. An invalid reading is reported on
standard error and skipped. The command stops at end of input or on Ctrl-C.

## What it does not do

The package does not talk to hardware. It does not:

- sample an ADC
- drive the relay or buzzer pins
- write to an I2C bus or the LED matrix
- join a Wi-Fi network
- reboot into a bootloader

Those outputs are returned as values (`StepResult`, `fifo_word`, the bytes
passed to `write`), and `bootloader_requested` is only a flag. The command
neither draws a display nor reacts to buttons. It only feeds readings typed on
standard input into the controller and serves the web page.