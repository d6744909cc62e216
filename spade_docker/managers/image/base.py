"""镜像记录基础类型定义"""

from enum import Enum
from typing import List, NamedTuple, Type, TypedDict, TypeVar


class SpadeDockerError(Exception):
    """spade-docker 所有错误的基类"""
    pass


class RecordIOError(SpadeDockerError, OSError):
    """文件或进程读写错误"""
    pass


class RecordEncodingError(SpadeDockerError, ValueError):
    """需要文本的地方出现了无效数据"""
    pass


class ProtocolError(SpadeDockerError):
    """构建工具输出不符合预期格式"""
    pass


class BuilderFailedError(SpadeDockerError):
    """无法启动构建工具或读取其输出"""
    pass


class InspectionError(RecordIOError):
    """检查镜像失败"""
    pass


class ImageNotFoundError(InspectionError):
    """镜像已不存在"""
    pass


class InvalidValueError(SpadeDockerError, ValueError):
    """无法识别的枚举取值"""
    pass


E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: Type[E], kind: str, token: str) -> E:
    """
    将字符串解析为枚举成员

    Args:
        enum_cls: 枚举类型
        kind: 取值种类，用于错误消息
        token: 待解析的字符串

    Returns:
        对应的枚举成员

    Raises:
        InvalidValueError: 无法识别时抛出
    """
    for member in enum_cls:
        if member.value == token:
            return member
    choices = ", ".join(member.value for member in enum_cls)
    raise InvalidValueError(f"无效的{kind} '{token}'，可选值: {choices}")


class Architecture(str, Enum):
    """目标架构，必须同时被Rust镜像和Zig支持"""

    X86_64 = "x86_64"
    AARCH64 = "aarch64"

    @classmethod
    def parse(cls, token: str) -> "Architecture":
        return parse_enum(cls, "架构", token)

    def __str__(self) -> str:
        return self.value


class ZigVersion(str, Enum):
    """要安装的Zig版本"""

    V0_13_0 = "0.13.0"

    @classmethod
    def parse(cls, token: str) -> "ZigVersion":
        return parse_enum(cls, "Zig版本", token)

    def __str__(self) -> str:
        return self.value


class PrunePolicy(str, Enum):
    """删除镜像成功后如何收缩记录"""

    # 只保留当前镜像之后的记录
    SUFFIX = "suffix"
    # 保留除已删除镜像外的全部记录
    REMAINING = "remaining"

    @classmethod
    def parse(cls, token: str) -> "PrunePolicy":
        return parse_enum(cls, "清理策略", token)

    def __str__(self) -> str:
        return self.value


class MissingImagePolicy(str, Enum):
    """检查时镜像已不存在的处理方式"""

    FAIL = "fail"
    FORGET = "forget"

    @classmethod
    def parse(cls, token: str) -> "MissingImagePolicy":
        return parse_enum(cls, "缺失镜像策略", token)

    def __str__(self) -> str:
        return self.value


class BuildArguments(NamedTuple):
    """构建参数"""
    architecture: Architecture
    zig_version: ZigVersion
    spade_rev: str
    swim_rev: str


class PruneReport(TypedDict):
    """清理结果"""
    removed: List[str]
    kept: List[str]
    forgotten: List[str]
