from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from beer_backend.beers.routes import router as beers_router
from beer_backend.users.routes import router as users_router
from beer_backend.database import init_db

import logging

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

init_db()

app = FastAPI(title="Beer Reviews API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(beers_router)
app.include_router(users_router)


@app.get("/ping")
def ping():
    return {"status": "ok"}


def run():
    import uvicorn
    uvicorn.run("beer_backend.main:app", host="0.0.0.0", port=8000, reload=False)


if __name__ == "__main__":
    run()
