"""
Tool installation settings
"""
import sys
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

from csolution_builder.policy.options import InstallConfig


class Settings(BaseSettings):
    """Install locations, overridable from the environment or a .env file"""

    # Directory holding csolution, cpackget and cbuildgen
    CBUILD_BIN_PATH: Optional[str] = None
    # Directory holding toolchain config files (defaults to <bin>/../etc)
    CBUILD_ETC_PATH: Optional[str] = None
    CBUILD_BIN_EXTN: str = ".exe" if sys.platform.startswith("win") else ""

    @property
    def bin_path(self) -> Path:
        if self.CBUILD_BIN_PATH:
            return Path(self.CBUILD_BIN_PATH)
        return Path(sys.executable).resolve().parent

    @property
    def etc_path(self) -> Path:
        if self.CBUILD_ETC_PATH:
            return Path(self.CBUILD_ETC_PATH)
        return self.bin_path.parent / "etc"

    def install_config(self) -> InstallConfig:
        return InstallConfig(
            bin_path=self.bin_path,
            etc_path=self.etc_path,
            bin_extn=self.CBUILD_BIN_EXTN,
        )

    class Config:
        env_file = ".env"
        case_sensitive = True
