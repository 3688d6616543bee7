"""领域层模型与协议。

包含：
- models: Message / RequestPayload 等统一数据结构。
- conversation: ConversationStore 抽象。
- exceptions: 业务异常类型定义。
"""
