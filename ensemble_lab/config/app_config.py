#!filepath: ensemble_lab/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .data_config import DataConfig
from .model_config import ModelConfig
from .split_config import SplitConfig, PrepConfig
from ensemble_lab import logs

DATA_DIR_ENV = "ENSEMBLE_LAB_DATA_DIR"


def project_root() -> str:
    """
    返回项目根目录（基于当前文件位置推导）:
    ensemble_lab/config/app_config.py → ensemble_lab/config → ensemble_lab → project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    data: DataConfig
    split: SplitConfig = Field(default_factory=SplitConfig)
    prep: PrepConfig = Field(default_factory=PrepConfig)
    model: ModelConfig = Field(default_factory=ModelConfig)

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 <package>/config/base.yml
        - 不依赖当前工作目录
        - ENSEMBLE_LAB_DATA_DIR 覆盖 data.data_dir
        """
        root = project_root()

        # 1) 先加载 .env（在项目根目录下）
        load_dotenv(os.path.join(root, ".env"))

        # 2) 决定配置文件路径
        if path is None:
            path = os.path.join(os.path.dirname(__file__), "base.yml")

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) 环境变量覆盖
        data_dir = os.getenv(DATA_DIR_ENV)
        if data_dir:
            raw.setdefault("data", {})["data_dir"] = data_dir
            logs.debug(f"[AppConfig] data_dir overridden by {DATA_DIR_ENV}={data_dir}")

        return cls(**raw)
