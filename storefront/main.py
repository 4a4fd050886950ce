# storefront/main.py
import os
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from .config import LOG_LEVEL
from .routes.products import router as products_router
from .routes.payment_intents import router as payment_intents_router
from .routes.webhooks import router as webhooks_router
from .db import init_db, close_conn

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Storefront Checkout API",
    version="0.1.0",
    description="Product inventory and PaymentIntent creation for the payment-request checkout.",
)

# The payment-request button calls the payment-intent function from the browser
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
def startup():
    init_db()

@app.on_event("shutdown")
def shutdown():
    close_conn()

def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    base = os.getenv("PUBLIC_BASE_URL", "").strip()
    if base:
        schema["servers"] = [{"url": base}]

    app.openapi_schema = schema
    return app.openapi_schema

app.openapi = custom_openapi

@app.get("/healthz")
async def healthz():
    return {"status": "ok"}

# Routers
app.include_router(products_router, prefix="")
app.include_router(payment_intents_router, prefix="")
app.include_router(webhooks_router, prefix="")
