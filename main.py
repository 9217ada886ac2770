from fastapi import FastAPI

import config
from db import init_db
from routes import accounts, events, forecast, state

app = FastAPI(title="Future Money", version=config.APP_VERSION)

@app.on_event("startup")
def startup():
    init_db()

app.include_router(accounts.router)
app.include_router(events.router)
app.include_router(forecast.router)
app.include_router(state.router)


@app.get("/health")
def health():
    return {"status": "ok", "version": config.APP_VERSION}
