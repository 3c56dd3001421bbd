"""
统一异常体系。

所有业务异常继承 BaseAppException，包含：
- type:        错误类型标识（validation_error / block）
- code:        业务错误码（ORDER_NOT_FOUND / ILLEGAL_TRANSITION / ...）
- message:     人类可读的描述
- detail:      可选的附加信息（dict / list / None）
- http_status: HTTP 状态码

Service 层只需 raise：JSON 接口由 ExceptionHandlerMixin / unified_exception_handler
统一格式化，HTML 表单接口把 *_NOT_FOUND 转成 404。
"""


class BaseAppException(Exception):
    """所有业务异常的基类。"""

    type = 'error'
    code = 'UNKNOWN_ERROR'
    http_status = 500

    def __init__(self, message, code=None, detail=None, http_status=None):
        self.message = message
        if code is not None:
            self.code = code
        if http_status is not None:
            self.http_status = http_status
        self.detail = detail
        super().__init__(message)

    @property
    def is_not_found(self):
        return self.http_status == 404


class ValidationError(BaseAppException):
    """输入验证失败，400。"""

    type = 'validation_error'
    code = 'VALIDATION_ERROR'
    http_status = 400


class BlockError(BaseAppException):
    """业务规则阻止操作（非法状态迁移、查无此单等）。service 层抛出，409。"""

    type = 'block'
    code = 'BUSINESS_BLOCK'
    http_status = 409
