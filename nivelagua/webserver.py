"""Small HTTP server exposing the water level and accepting new pump limits."""

from __future__ import annotations

import argparse
import json
import re
import socketserver
import sys
import threading

from .controller import WaterLevelController

HTML_BODY = (
    "<!DOCTYPE html><html><head><meta charset='UTF-8'><title>Controle de Nivel</title>"
    "<meta name='viewport' content='width=device-width, initial-scale=1.0'>"
    "<style>"
    "body { font-family: 'Poppins', Tahoma, Geneva, Verdana, sans-serif; text-align: center; "
    "padding: 20px; background: linear-gradient(135deg,rgb(104, 169, 243) 0%, #764ba2 100%); "
    "display: flex; justify-content: center; align-items: center; height: 99vh; margin: 0;  }"
    "h1 { color: #764ba2 }"
    ".container { background: rgba(255, 255, 255, 0.95); padding: 20px; border-radius: 12px; "
    "box-shadow: 0 4px 12px rgba(0,0,0,0.1); max-width: 400px; margin: auto;}"
    "p { font-size: 18px; } #status { font-weight: bold; }"
    "form { margin-top: 20px; } label { display: block; margin-bottom: 5px; font-weight: bold; }"
    "input[type=number] { width: 90%; padding: 10px; margin-bottom: 15px; "
    "border: 1px solid #ccc; border-radius: 4px; }"
    "input[type=submit] { background: white; color: #764ba2 ; padding: 10px 20px; border: none; "
    "border-radius: 12px; font-size: 16px; cursor: pointer; font-weight: bold; "
    "transition: background 0.3s, color 0.3s; }"
    ".card-limites { background: linear-gradient(135deg, #764ba2 0%,rgb(104, 169, 243) 100%); "
    "padding: 10px; margin-top: 30px; border-radius: 10px; "
    "box-shadow: inset 0 0 5px rgba(0,0,0,0.05); text-align: left; text-align: center; "
    "color:rgb(255, 255, 255); }"
    "</style>"
    "<script>"
    "function atualizar() {"
    "  fetch('/estado').then(res => res.json()).then(data => {"
    "    document.getElementById('nivel').innerText = data.nivel + '%';"
    "    document.getElementById('barra').style.width = data.nivel + '%';"
    "    document.getElementById('bomba').innerText = data.bomba ? 'LIGADA' : 'Desligada';"
    "    document.getElementById('bomba').style.color = data.bomba ? '#4CAF50' : '#f44336';"
    "  });"
    "}"
    "setInterval(atualizar, 1000);"
    "</script></head><body onload='atualizar()'>"
    "<div class='container'>"
    "<div style='font-size: 48px;'>\U0001F4A7</div>"
    "<h1>Controle de Nível de Água</h1>"
    "<p style='text-align: center; font-weight: bold;'>Nível Atual:</p>"
    "<div style='position: relative; height: 24px; background: #eee; border-radius: 12px; "
    "overflow: hidden;'>"
    "<div id='barra' style='height: 100%; width: 0%; background:linear-gradient(135deg,"
    "rgb(104, 169, 243) 0%,rgb(107, 109, 197) 100%);;'></div>"
    "<span id='nivel' style='position: absolute; top: 2px; left: 50%; "
    "transform: translateX(-50%); font-weight: bold; color:rgb(167, 179, 233);'></span>"
    "</div>"
    "<p style='font-weight: bold;'>Status da Bomba: <span id='bomba'>--</span></p>"
    "<div class='card-limites'>"
    "<h2>Gerenciar Limites</h2>"
    "<form action='/limites' method='get'>"
    "<label for='min'>Limite Mínimo (%):</label>"
    "<input type='number' id='min' name='min' required>"
    "<label for='max'>Limite Máximo (%):</label>"
    "<input type='number' id='max' name='max' required>"
    "<input type='submit' value='Atualizar Limites'>"
    "</form>"
    "</div>"
    "</div></body></html>"
)

REDIRECT_RESPONSE = b"HTTP/1.1 302 Found\r\nLocation: /\r\n\r\n"
RECV_SIZE = 4096
DEFAULT_PORT = 80

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:inf(?:inity)?|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))",
    re.IGNORECASE,
)


def _scan_float(text: str, key: str) -> float | None:
    """Parse the number that follows ``key`` at the start of ``text``, if any."""
    match = _FLOAT_PREFIX.match(text, len(key))
    return float(match.group(1)) if match else None


def _ok_response(content_type: str, body: bytes) -> bytes:
    header = (
        "HTTP/1.1 200 OK\r\n"
        f"Content-Type: {content_type}\r\n"
        f"Content-Length: {len(body)}\r\n"
        "Connection: close\r\n\r\n"
    )
    return header.encode("ascii") + body


def handle_request(request, controller: WaterLevelController) -> bytes:
    """Build the full HTTP response for a raw request."""
    if isinstance(request, (bytes, bytearray)):
        request = bytes(request).decode("latin-1")

    if "GET /limites" in request:
        min_at = request.find("min=")
        max_at = request.find("max=")
        if min_at >= 0 and max_at >= 0:
            new_min = _scan_float(request[min_at:], "min=")
            new_max = _scan_float(request[max_at:], "max=")
            controller.set_limits(
                controller.lim_min if new_min is None else new_min,
                controller.lim_max if new_max is None else new_max,
            )
        return REDIRECT_RESPONSE

    if "GET /estado" in request:
        payload = '{"nivel":%s,"bomba":%s}' % (
            f"{controller.level:.1f}",
            "true" if controller.pump_on else "false",
        )
        return _ok_response("application/json", payload.encode("ascii"))

    return _ok_response("text/html", HTML_BODY.encode("utf-8"))


class _Handler(socketserver.BaseRequestHandler):
    def handle(self) -> None:
        data = self.request.recv(RECV_SIZE)
        if not data:
            return
        self.request.sendall(handle_request(data, self.server.controller))


class _Server(socketserver.ThreadingTCPServer):
    allow_reuse_address = True
    daemon_threads = True

    def __init__(self, address, controller: WaterLevelController) -> None:
        self.controller = controller
        super().__init__(address, _Handler)


def make_server(controller: WaterLevelController, host: str = "0.0.0.0",
                port: int = DEFAULT_PORT) -> socketserver.ThreadingTCPServer:
    """Create a bound, listening server for ``controller``."""
    return _Server((host, port), controller)


def main(argv=None) -> int:
    """Serve the web page and feed ADC readings, one per line, from standard input."""
    parser = argparse.ArgumentParser(description="Water level controller web server.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    controller = WaterLevelController()
    server = make_server(controller, args.host, args.port)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    print(f"Servidor HTTP iniciado na porta {server.server_address[1]}")
    try:
        for line in sys.stdin:
            line = line.strip()
            if not line:
                continue
            try:
                result = controller.step(int(line))
            except ValueError as exc:
                print(f"Leitura invalida: {exc}", file=sys.stderr)
                continue
            pump = "LIGADA" if result.pump_on else "DESLIGADA"
            print(f"ADC: {result.adc_value} Nivel: {result.level:.0f}% Bomba: {pump}")
    except KeyboardInterrupt:
        pass
    finally:
        server.shutdown()
        server.server_close()
    return 0