from fastapi import Request

from railway_defects.config.settings import Settings


async def get_report_store(request: Request):
    return request.app.state.report_store


async def get_user_store(request: Request):
    return request.app.state.user_store


async def get_settings(request: Request) -> Settings:
    return request.app.state.settings
