import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from collabhub.core.config import settings
from collabhub.core.database import engine, init_models
from collabhub.routers import (
    auth_router, user_router,
    profile_router, project_router,
    recommendation_router, message_router,
    marketplace_router
)

# 單獨匯入 "application_router.py" 檔案中的 *兩個* router
from collabhub.routers.application_router import (
    router as application_main_router,
    project_application_router
)

# --- 匯入所有 Model 檔案 ---
# 都在應用程式啟動時被 SQLAlchemy 註冊。
from collabhub.models import user
from collabhub.models import profile
from collabhub.models import project
from collabhub.models import application
from collabhub.models import message
from collabhub.models import marketplace_item


# 設定基礎日誌
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 開發環境直接建表，正式環境請改用 migration
    await init_models()
    logger.info("Database tables ready")
    yield
    await engine.dispose()


app = FastAPI(title="CollabHub API", lifespan=lifespan)

# --- 設定 CORS (跨來源資源共用) ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"], # 允許所有 HTTP 方法
    allow_headers=["*"], # 允許所有 HTTP 標頭
)

# --- 物件儲存 (頭像、商品圖片) 的公開下載路徑 ---
os.makedirs(settings.STORAGE_ROOT, exist_ok=True)
app.mount(settings.STORAGE_URL_PREFIX, StaticFiles(directory=settings.STORAGE_ROOT), name="storage")

# --- 根路徑 ---
@app.get("/")
def read_root():
    return {"status": "success", "message": "Backend is running!"}

# --- 載入 API 路由 ---
app.include_router(auth_router.router)
app.include_router(user_router.router)
app.include_router(profile_router.router)
app.include_router(project_router.router)
app.include_router(application_main_router)
app.include_router(project_application_router)
app.include_router(recommendation_router.router)
app.include_router(message_router.router)
app.include_router(marketplace_router.router)
