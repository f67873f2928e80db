# collabhub/utils/lifecycle.py
# 案件生命週期：狀態、轉移表、以及「誰可以做什麼」的判斷
# (純函式，不碰資料庫，方便單元測試)
import enum
from typing import Dict, Optional, Set, Tuple


class ProjectStatus(str, enum.Enum):
    open = "open"                # 招募中 (接受申請)
    assigned = "assigned"        # 已指派工作者
    in_progress = "in_progress"  # 進行中
    review = "review"            # 等待雇主驗收
    revision = "revision"        # 雇主要求修改
    completed = "completed"      # 已完成 (終態)


class ViewerRole(str, enum.Enum):
    client = "client"
    freelancer = "freelancer"
    other = "other"


class LifecycleAction(str, enum.Enum):
    start_work = "start_work"
    submit_work = "submit_work"
    resubmit_work = "resubmit_work"
    approve = "approve"
    request_revision = "request_revision"


# 已指派工作者之後的所有狀態 (freelancer_id 必須有值)
ASSIGNED_STATUSES: Set[ProjectStatus] = {
    ProjectStatus.assigned,
    ProjectStatus.in_progress,
    ProjectStatus.review,
    ProjectStatus.revision,
    ProjectStatus.completed,
}

# 可以直接透過 update_status 執行的轉移: (目前狀態, 新狀態) -> 允許的角色
# open -> assigned 不在這裡，只能由「接受申請」觸發
ALLOWED_TRANSITIONS: Dict[Tuple[ProjectStatus, ProjectStatus], ViewerRole] = {
    (ProjectStatus.assigned, ProjectStatus.in_progress): ViewerRole.freelancer,
    (ProjectStatus.in_progress, ProjectStatus.review): ViewerRole.freelancer,
    (ProjectStatus.review, ProjectStatus.completed): ViewerRole.client,
    (ProjectStatus.review, ProjectStatus.revision): ViewerRole.client,
    (ProjectStatus.revision, ProjectStatus.review): ViewerRole.freelancer,
}

# 動作 -> (執行角色, 需要的目前狀態, 目標狀態)
ACTIONS: Dict[LifecycleAction, Tuple[ViewerRole, ProjectStatus, ProjectStatus]] = {
    LifecycleAction.start_work: (ViewerRole.freelancer, ProjectStatus.assigned, ProjectStatus.in_progress),
    LifecycleAction.submit_work: (ViewerRole.freelancer, ProjectStatus.in_progress, ProjectStatus.review),
    LifecycleAction.resubmit_work: (ViewerRole.freelancer, ProjectStatus.revision, ProjectStatus.review),
    LifecycleAction.approve: (ViewerRole.client, ProjectStatus.review, ProjectStatus.completed),
    LifecycleAction.request_revision: (ViewerRole.client, ProjectStatus.review, ProjectStatus.revision),
}


class TransitionError(Exception):
    """不合法的狀態轉移。forbidden=True 表示轉移存在，但角色不符。"""

    def __init__(self, message: str, forbidden: bool = False):
        super().__init__(message)
        self.forbidden = forbidden


def viewer_role(client_id: str, freelancer_id: Optional[str], user_id: str) -> ViewerRole:
    if user_id == client_id:
        return ViewerRole.client
    if freelancer_id is not None and user_id == freelancer_id:
        return ViewerRole.freelancer
    return ViewerRole.other


def can_act(status: ProjectStatus, role: ViewerRole) -> Set[LifecycleAction]:
    """
    回傳某角色在某狀態下可以執行的動作集合 (沒有就是空集合)
    """
    status = ProjectStatus(status)
    role = ViewerRole(role)
    return {
        action
        for action, (action_role, from_status, _) in ACTIONS.items()
        if action_role == role and from_status == status
    }


def check_transition(current: ProjectStatus, new: ProjectStatus, role: ViewerRole) -> None:
    """
    驗證狀態轉移，不合法時拋出 TransitionError
    """
    current = ProjectStatus(current)
    new = ProjectStatus(new)
    transition = (current, new)

    if transition == (ProjectStatus.open, ProjectStatus.assigned):
        raise TransitionError("案件只能透過接受申請來指派工作者")

    if transition not in ALLOWED_TRANSITIONS:
        raise TransitionError(f"不合法的狀態轉移: {current.value} -> {new.value}")

    if ALLOWED_TRANSITIONS[transition] != ViewerRole(role):
        raise TransitionError(
            f"你的角色 ({ViewerRole(role).value}) 無權執行此狀態轉移",
            forbidden=True
        )


def target_status(action: LifecycleAction) -> ProjectStatus:
    return ACTIONS[LifecycleAction(action)][2]
