import logging
from http import HTTPStatus

from fastapi import FastAPI
from fastapi.responses import ORJSONResponse
from starlette.middleware.cors import CORSMiddleware

from routers import shipping_router
from utils.shipping import shipping_gateway

logger = logging.getLogger("fastapi")
app = FastAPI(title="Cargo Gateway")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def health_check():
    resp = {}
    resp["server_health"] = "Cargo Gateway API health OK"
    resp["carriers"] = {
        provider["name"]: "configured" if provider["available"] else "disabled"
        for provider in shipping_gateway.available_providers()
    }

    return ORJSONResponse(content=resp, status_code=HTTPStatus.OK)


app.include_router(shipping_router)
