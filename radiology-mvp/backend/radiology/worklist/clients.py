"""
具体 worklist client 实现。

新增后端：在此文件添加一个类，然后在 factory.py 注册即可。

已注册后端：
  local — LocalWorklistClient   (不连外部系统，全部返回 *_OK)
"""

import logging

from ..models import MwlStatus
from .base import BaseWorklistClient
from .types import ACTIONS

logger = logging.getLogger(__name__)


# ── LocalWorklistClient ────────────────────────────────────────────────────
#
# 开发 / 测试用。没有真实的 modality worklist 时，
# 每个动作都视为成功，只写一条日志。

class LocalWorklistClient(BaseWorklistClient):

    def _accept(self, name, study) -> MwlStatus:
        logger.info("[Worklist][local] %s study_id=%s order_id=%s", name, study.pk, study.order_id)
        return ACTIONS[name].ok

    def save(self, study):
        return self._accept('save', study)

    def update(self, study):
        return self._accept('update', study)

    def void(self, study):
        return self._accept('void', study)

    def unvoid(self, study):
        return self._accept('unvoid', study)

    def discontinue(self, study):
        return self._accept('discontinue', study)

    def undiscontinue(self, study):
        return self._accept('undiscontinue', study)
