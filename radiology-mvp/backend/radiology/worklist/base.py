"""
BaseWorklistClient — 所有 modality worklist 实现的抽象基类。

每个新 worklist 后端只需：
1. 继承 BaseWorklistClient
2. 实现 save / update / void / unvoid / discontinue / undiscontinue
3. 在 factory.py 的 _REGISTRY 注册一行

services.py 完全不知道背后用哪种 worklist。
"""

import logging
from abc import ABC, abstractmethod

from ..models import MwlStatus, Study
from .types import WorklistAction

logger = logging.getLogger(__name__)


class BaseWorklistClient(ABC):

    @abstractmethod
    def save(self, study: Study) -> MwlStatus:
        """
        新 study 第一次写入 worklist。

        Returns:
            MwlStatus.SAVE_OK / MwlStatus.SAVE_ERR

        Raises:
            Exception: 传输失败时可以直接抛出，dispatch() 会转成 SAVE_ERR
        """

    @abstractmethod
    def update(self, study: Study) -> MwlStatus:
        """已有 study 的 worklist 条目更新。"""

    @abstractmethod
    def void(self, study: Study) -> MwlStatus:
        ...

    @abstractmethod
    def unvoid(self, study: Study) -> MwlStatus:
        ...

    @abstractmethod
    def discontinue(self, study: Study) -> MwlStatus:
        ...

    @abstractmethod
    def undiscontinue(self, study: Study) -> MwlStatus:
        ...

    # ── 对外统一入口 ───────────────────────────────────────────────────────

    def dispatch(self, action: WorklistAction, study: Study) -> MwlStatus:
        """
        调用 action 对应的方法。

        worklist 失败不能让整个请求失败：订单照样保存，
        异常记日志后转成 action.err，由 outcomes.py 提示用户。
        """
        try:
            return getattr(self, action.name)(study)
        except Exception:
            logger.exception(
                "[Worklist] %s failed for study_id=%s (order_id=%s)",
                action.name, study.pk, study.order_id,
            )
            return action.err
