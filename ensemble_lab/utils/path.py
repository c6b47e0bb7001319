#!filepath: ensemble_lab/utils/path.py
from pathlib import Path
from typing import Optional

from ensemble_lab import logs


class PathManager:
    """
    项目目录结构：

    <root>
     ├── ensemble_lab/
     │     └── utils/path.py
     ├── data/
     │     ├── diamonds.csv
     │     └── mushrooms.csv
     └── logs/

    root     = 仓库根目录
    data_dir = root / data（可被 set_data_dir / ENSEMBLE_LAB_DATA_DIR 覆盖）
    """

    _root: Optional[Path] = None
    _data_dir: Optional[Path] = None

    # ---------------------------------------------------------
    # root detection
    # ---------------------------------------------------------
    @classmethod
    def detect_root(cls) -> Path:
        """
        当前文件位于 <root>/ensemble_lab/utils/path.py
        因此 root = parents[2]
        """
        current = Path(__file__).resolve()
        root = current.parents[2]
        logs.debug(f"[PathManager] detect_root = {root}")
        return root

    @classmethod
    def root(cls) -> Path:
        if cls._root is None:
            cls._root = cls.detect_root()
        return cls._root

    @classmethod
    def set_root(cls, new_root: Path | str | None):
        if new_root is None:
            cls._root = None
        else:
            cls._root = Path(new_root).resolve()
        logs.debug(f"[PathManager] set_root = {cls._root}")

    @classmethod
    def set_data_dir(cls, data_dir: Path | str | None):
        """
        相对路径基于 root 解析。
        """
        if data_dir is None:
            cls._data_dir = None
        else:
            p = Path(data_dir)
            cls._data_dir = p if p.is_absolute() else cls.root() / p
        logs.debug(f"[PathManager] set_data_dir = {cls._data_dir}")

    # ---------------------------------------------------------
    # Top-level dirs
    # ---------------------------------------------------------
    @classmethod
    def data_dir(cls) -> Path:
        if cls._data_dir is not None:
            return cls._data_dir
        return cls.root() / "data"

    @classmethod
    def config_dir(cls) -> Path:
        return cls.root() / "ensemble_lab" / "config"

    @classmethod
    def default_config_file(cls) -> Path:
        return cls.config_dir() / "base.yml"

    # ---------------------------------------------------------
    # data/
    # ---------------------------------------------------------
    @classmethod
    def dataset_file(cls, file: str) -> Path:
        """
        绝对路径原样返回，否则位于 data_dir 下。
        """
        p = Path(file)
        if p.is_absolute():
            return p
        return cls.data_dir() / p
