"""
工厂函数：根据 settings.RADIOLOGY_WORKLIST_BACKEND 返回对应的 worklist client。

新增后端只需：
  1. 在 clients.py 新建 XxxWorklistClient(BaseWorklistClient) 类
  2. 在此处 _REGISTRY 加一行
  不需要修改 services.py 或任何业务代码。
"""

from django.conf import settings

from .base import BaseWorklistClient


def _build_registry() -> dict[str, type[BaseWorklistClient]]:
    # 延迟导入，避免在 Django 启动前触发 models import
    from .clients import LocalWorklistClient

    return {
        "local": LocalWorklistClient,
    }


def get_worklist_client() -> BaseWorklistClient:
    """
    从 settings.RADIOLOGY_WORKLIST_BACKEND 读取后端名，返回对应实例。

    Raises:
        ValueError: RADIOLOGY_WORKLIST_BACKEND 未知
    """
    backend = getattr(settings, "RADIOLOGY_WORKLIST_BACKEND", "local")
    registry = _build_registry()
    client_cls = registry.get(backend)

    if client_cls is None:
        raise ValueError(
            f"Unknown RADIOLOGY_WORKLIST_BACKEND: {backend!r}. "
            f"Known backends: {list(registry.keys())}"
        )

    return client_cls()
