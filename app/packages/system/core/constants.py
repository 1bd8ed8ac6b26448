"""系统级常量定义。"""

HTTP_STATUS_OK = 200
HTTP_STATUS_BAD_REQUEST = 400

# 组织表中表示“有效”的状态值
DEFAULT_ACTIVE_STATUS = "1"

# 兼容旧服务输出的字段名（`org_childs` 拼写需保持不变）
ORG_ID_FIELD = "org_id"
ORG_NAME_FIELD = "org_name"
ORG_CHILDREN_FIELD = "org_childs"
