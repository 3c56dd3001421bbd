"""
Worklist 层的标准动作定义。

每个动作对应一对 MwlStatus（成功 / 失败）。
BaseWorklistClient.dispatch() 和 outcomes.py 都只认识这个结构。
"""

from dataclasses import dataclass

from ..models import MwlStatus


@dataclass(frozen=True)
class WorklistAction:
    name: str             # 对应 BaseWorklistClient 上的方法名
    ok: MwlStatus
    err: MwlStatus


SAVE = WorklistAction('save', MwlStatus.SAVE_OK, MwlStatus.SAVE_ERR)
UPDATE = WorklistAction('update', MwlStatus.UPDATE_OK, MwlStatus.UPDATE_ERR)
VOID = WorklistAction('void', MwlStatus.VOID_OK, MwlStatus.VOID_ERR)
UNVOID = WorklistAction('unvoid', MwlStatus.UNVOID_OK, MwlStatus.UNVOID_ERR)
DISCONTINUE = WorklistAction('discontinue', MwlStatus.DISCONTINUE_OK, MwlStatus.DISCONTINUE_ERR)
UNDISCONTINUE = WorklistAction('undiscontinue', MwlStatus.UNDISCONTINUE_OK, MwlStatus.UNDISCONTINUE_ERR)

ACTIONS: dict[str, WorklistAction] = {
    action.name: action
    for action in (SAVE, UPDATE, VOID, UNVOID, DISCONTINUE, UNDISCONTINUE)
}
