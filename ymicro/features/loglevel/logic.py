from abc import ABC, abstractmethod

from ymicro.log import adjust_level, current_level_name


class Core(ABC):
    """运行时日志级别调整"""

    @abstractmethod
    def set_log_level(self, level: str) -> None:
        pass

    @abstractmethod
    def get_log_level(self) -> str:
        pass


class CoreLogic(Core):
    def set_log_level(self, level: str) -> None:
        adjust_level(level)

    def get_log_level(self) -> str:
        return current_level_name()
