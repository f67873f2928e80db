# collabhub/core/config.py
# 應用程式設定 (資料庫連線字串、JWT 秘鑰、檔案儲存位置等)
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # 資料庫設定 (正式環境: mysql+aiomysql://..., 開發/測試: sqlite+aiosqlite://...)
    DATABASE_URL: str = "sqlite+aiosqlite:///./collabhub.db"
    # 設為 True 會在 console 印出 SQL 語句
    SQL_ECHO: bool = False

    # JWT 設定
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    # 存取令牌過期時間（分鐘）
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # 物件儲存 (頭像、二手商品圖片)
    STORAGE_ROOT: str = "./static/storage"
    STORAGE_URL_PREFIX: str = "/storage"
    MAX_UPLOAD_IMAGES: int = 5
    MAX_IMAGE_SIZE_MB: int = 5

    # CORS (在生產環境中應限制)
    CORS_ORIGINS: List[str] = ["*"]

    # 環境變數檔案
    model_config = SettingsConfigDict(env_file=".env")

# 建立設定實例
settings = Settings()
