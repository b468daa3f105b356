import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from railway_defects.config.settings import Settings
from railway_defects.routes import dashboard, health, reports, users
from railway_defects.sample_data import SAMPLE_DEFECTS, SAMPLE_USERS
from railway_defects.stores.memory import MemoryReportStore, MemoryUserStore


def _build_stores(app: FastAPI, settings: Settings):
    if settings.mongodb_uri:
        from railway_defects.config.database import create_database
        from railway_defects.stores.mongo import MongoReportStore, MongoUserStore

        database = create_database(settings)
        app.state.report_store = MongoReportStore(database)
        app.state.user_store = MongoUserStore(database)
        print("Using MongoDB report/user stores")
        return

    seed = settings.seed_sample_data
    app.state.report_store = MemoryReportStore(SAMPLE_DEFECTS if seed else ())
    app.state.user_store = MemoryUserStore(SAMPLE_USERS if seed else ())
    print(f"Using in-memory report/user stores (seeded: {seed})")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Railway Defect Tracker",
        description="API for railway track defect reports, users and dashboard statistics.",
        version="1.0.0",
    )
    app.state.settings = settings

    # Measure request processing time
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        print(f"Processing time for {request.url}: {process_time:.2f} seconds")
        response.headers["X-Process-Time"] = str(process_time)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _build_stores(app, settings)

    @app.on_event("startup")
    async def startup_event():
        seed = getattr(app.state.report_store, "seed", None)
        if seed is not None and settings.seed_sample_data:
            await seed(SAMPLE_DEFECTS)
            await app.state.user_store.seed(SAMPLE_USERS)
        print("Startup completed")

    app.include_router(reports.router, prefix="/api", tags=["Reports"])
    app.include_router(users.router, prefix="/api", tags=["Users"])
    app.include_router(dashboard.router, prefix="/api", tags=["Dashboard"])
    app.include_router(health.router, prefix="/api", tags=["Health"])

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("railway_defects.main:create_app", factory=True, host="0.0.0.0", port=Settings.from_env().port)
