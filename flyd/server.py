import logging
import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from prometheus_client import Info
from prometheus_fastapi_instrumentator import Instrumentator

from flyd.errors import ProxyError, proxy_error_handler, validation_error_handler
from flyd.http_client import http_client_lifespan
from flyd.routes import router
from flyd.vars import HOST, LOG_LEVEL, OTLP_ENDPOINT, OTLP_HEADERS, PORT, SERVICE_NAME

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=SERVICE_NAME, lifespan=http_client_lifespan)
instrumentator = Instrumentator()

instrumentator.instrument(app).expose(app)

trace.set_tracer_provider(
    TracerProvider(resource=Resource.create({"service.name": SERVICE_NAME}))
)
if OTLP_ENDPOINT:
    trace.get_tracer_provider().add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(
                endpoint=OTLP_ENDPOINT,
                headers=OTLP_HEADERS or None,
            )
        )
    )

# One server span per request, without per-message ASGI send/receive spans
FastAPIInstrumentor.instrument_app(app, exclude_spans=["send", "receive"])

app_info = Info("fastapi_app_info", "Application Info")
app_info.info({"app_name": SERVICE_NAME})


@app.middleware("http")
async def access_log(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    client_ip = request.client.host if request.client else "-"
    logger.info(f"IP - {client_ip} | Time - {elapsed_ms:.6f} ms")
    return response


app.add_exception_handler(ProxyError, proxy_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

app.include_router(router)


def main():
    uvicorn.run("flyd.server:app", host=HOST, port=PORT, log_level=LOG_LEVEL)


if __name__ == "__main__":
    main()
