from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles

from fcm_tester.app_state import build_provider_handle, get_provider_handle, set_provider_handle
from fcm_tester.config import settings
from fcm_tester.routers import firebase, ui
from fcm_tester.routers.ui import UI_DIR

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)s %(name)s %(message)s',
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    set_provider_handle(build_provider_handle())
    logging.getLogger(__name__).info('fcm_tester_started env=%s', settings.app_env)
    yield
    handle = get_provider_handle()
    set_provider_handle(None)
    handle.reset()


app = FastAPI(title=settings.app_name, version='0.1.0', lifespan=lifespan)
app.mount('/ui-static', StaticFiles(directory=str(UI_DIR / 'static')), name='ui-static')


@app.middleware('http')
async def slow_request_logger(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - started) * 1000.0
    if duration_ms >= settings.metrics_slow_ms:
        logging.getLogger('fcm_tester.request').info(
            'request_slow path=%s method=%s status_code=%s duration_ms=%.2f',
            request.url.path,
            request.method,
            response.status_code,
            duration_ms,
        )
    return response

app.include_router(firebase.router)
app.include_router(ui.router)


@app.get('/health')
def healthcheck():
    return {'status': 'ok'}
