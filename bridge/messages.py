"""User-facing reply texts."""

SUBSCRIBE_GREETING = "👻 感谢您的关注！\n本公众号接入了 DeepSeek，你可以直接向我提问。"
EVENT_ACKNOWLEDGED = "📢 事件已收到，但未做特殊处理。"
NOTHING_PENDING = "⌛ 目前没有待查看的回答，请先输入问题。"
PROCESSING_PLACEHOLDER = "⏳ 处理中，请输入“继续”查看答案。"
PROCESSING_FAILED = "❌ 处理失败，请稍后再试。"
UNSUPPORTED_CONTENT = "📸 内容已收到，但当前不支持。"

DEFAULT_CONTINUE_KEYWORD = "继续"
