import asyncio

import aiohttp_cors
from aiohttp import web

from boiling import AlreadyBoiling, BoilingSessionManager, ClockError
from models import BatchState, parse_batch
from notifier import MontroyashiNotifier
from temperature import TemperatureGauge

DEFAULT_HTTP_HOST = "127.0.0.1"
DEFAULT_HTTP_PORT = 8030

MANAGER_KEY = web.AppKey("manager", BoilingSessionManager)
TEMPERATURE_KEY = web.AppKey("temperature", TemperatureGauge)
NOTIFIER_KEY = web.AppKey("notifier", MontroyashiNotifier)


async def _read_json(request) -> dict:
    """Request body as a JSON object; an empty body reads as {}."""
    if not request.can_read_body:
        return {}
    body = await request.json()
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body


def _error(status: int, message: str) -> web.Response:
    return web.json_response({"error": message}, status=status)


# ---------------------------------------------------------------------------
# Route handlers
# ---------------------------------------------------------------------------

async def handle_health(request):
    """
    GET /health
    Liveness probe.

    Response JSON:
        {
            "status": "ok",
            "state": "idle" | "boiling"
        }
    """
    manager = request.app[MANAGER_KEY]
    boiling = await asyncio.to_thread(manager.is_boiling)
    state = "boiling" if boiling else "idle"
    return web.json_response({"status": "ok", "state": state})


async def handle_start_boiling(request):
    """
    POST /start-boiling
    Body: {"potatoes": [{"size": 9, ...}, ...]}

    200 {} when the batch is in the pot, 412 while another batch is still
    boiling, 400 for a malformed body.
    """
    try:
        potatoes = parse_batch(await request.json())
    except ValueError as e:
        # json.JSONDecodeError is a ValueError too
        return web.Response(status=400, text=f"Invalid request body: {e}")

    manager = request.app[MANAGER_KEY]
    try:
        await asyncio.to_thread(manager.start_boiling, potatoes)
    except AlreadyBoiling as e:
        return _error(412, str(e))
    except ClockError as e:
        return _error(500, str(e))

    return web.json_response({})


async def handle_boiling_status(request):
    """
    POST /boiling-status

    Response JSON:
        {"status": "HardAsRock" | ... | "LikeButter"}
        or {"message": "idle"} when nothing is boiling
    """
    manager = request.app[MANAGER_KEY]
    try:
        status = await asyncio.to_thread(manager.query_status)
    except ClockError as e:
        return _error(500, str(e))

    if status is BatchState.IDLE:
        return web.json_response({"message": status.value})
    return web.json_response({"status": status.name})


async def handle_get_boiled_potatoes(request):
    """
    POST /get-boiled-potatoes

    Response JSON:
        {"potatoes": [...]} once the batch is done (it leaves the pot)
        or {"message": "not ready" | "idle"}
    """
    manager = request.app[MANAGER_KEY]
    try:
        result = await asyncio.to_thread(manager.collect_boiled)
    except ClockError as e:
        return _error(500, str(e))

    if isinstance(result, BatchState):
        return web.json_response({"message": result.value})
    return web.json_response({"potatoes": [p.to_dict() for p in result]})


async def handle_sound_heard(request):
    """
    POST /sound-heard
    Body: {"sound": "..."}

    Tells Montroyashi what the robot just heard.
    """
    try:
        body = await _read_json(request)
    except ValueError as e:
        return web.Response(status=400, text=f"Invalid request body: {e}")

    sound = body.get("sound")
    if not isinstance(sound, str) or not sound:
        return web.Response(status=400, text="Empty sound payload")

    notifier = request.app[NOTIFIER_KEY]
    await asyncio.to_thread(notifier.notify, f"I heard {sound}")
    return web.json_response({})


async def handle_get_temperature(request):
    """GET /temperature -> {"degrees_celcius": n}"""
    degrees = request.app[TEMPERATURE_KEY].read()
    return web.json_response({"degrees_celcius": degrees})


async def _adjust_temperature(request, adjust):
    try:
        body = await _read_json(request)
        degrees = adjust(body.get("degrees", 1))
    except ValueError as e:
        return web.Response(status=400, text=f"Invalid request body: {e}")

    return web.json_response({"degrees_celcius": degrees})


async def handle_increase_temperature(request):
    """POST /increase-temperature, body {"degrees": n} (optional, default 1)"""
    return await _adjust_temperature(request, request.app[TEMPERATURE_KEY].increase)


async def handle_decrease_temperature(request):
    """POST /decrease-temperature, body {"degrees": n} (optional, default 1)"""
    return await _adjust_temperature(request, request.app[TEMPERATURE_KEY].decrease)


# ---------------------------------------------------------------------------
# App factory + server runner
# ---------------------------------------------------------------------------

def build_app(
    manager: BoilingSessionManager | None = None,
    temperature: TemperatureGauge | None = None,
    notifier: MontroyashiNotifier | None = None,
) -> web.Application:
    if notifier is None:
        notifier = MontroyashiNotifier()
    if manager is None:
        manager = BoilingSessionManager(notifier=notifier)
    if temperature is None:
        temperature = TemperatureGauge()

    app = web.Application()
    app[MANAGER_KEY] = manager
    app[TEMPERATURE_KEY] = temperature
    app[NOTIFIER_KEY] = notifier

    app.router.add_get("/health", handle_health)
    app.router.add_post("/start-boiling", handle_start_boiling)
    app.router.add_post("/boiling-status", handle_boiling_status)
    app.router.add_post("/get-boiled-potatoes", handle_get_boiled_potatoes)
    app.router.add_post("/sound-heard", handle_sound_heard)
    app.router.add_get("/temperature", handle_get_temperature)
    app.router.add_post("/increase-temperature", handle_increase_temperature)
    app.router.add_post("/decrease-temperature", handle_decrease_temperature)

    cors = aiohttp_cors.setup(app, defaults={
        "*": aiohttp_cors.ResourceOptions(
            allow_headers=("Content-Type",),
            allow_methods=("GET", "POST", "DELETE"),
        ),
    })
    for route in list(app.router.routes()):
        cors.add(route)

    return app


def run_server(app: web.Application, host: str, port: int) -> None:
    """Serve `app` until interrupted (blocking)."""
    print(f"[HTTP] Nordo Service listening on http://{host}:{port}")
    web.run_app(app, host=host, port=port, print=None)
