"""
Utilities module for the Signal Generation System.

=== 开发者必读 / DEVELOPER GUIDE ===

--- 常用工具速查 (Quick Reference) ---

1. 数值处理 (numeric_utils.py) ★ 最常用
   from utils.numeric_utils import clean_numeric, clamp, round_half_up
   - clean_numeric(value)        清洗数值(NaN/Inf/None → None)
   - clamp(value)                分数限制在 [0, 100]
   - round_half_up(value)        四舍五入(不用 Python 的银行家舍入)

2. 日志 (logger.py)
   from utils.logger import setup_logger
   - logger = setup_logger('module_name')
   - LoggingContext: STANDALONE / BATCH / SILENT

3. HTTP请求 (http_utils.py)
   from utils.http_utils import make_request
   - make_request(url, params, retries=3, source_name="API")
   - 内置重试、超时、指数退避
   - 自动处理429/5xx等瞬态错误

=== 注意事项 ===
- 分数计算统一用 clamp() 和 round_half_up()
- 做HTTP请求时,务必使用 make_request(),不要直接用 requests.get()
- 日志统一用 setup_logger(),不要用 print() 做调试输出
"""

from .logger import setup_logger, LoggingContext, set_logging_mode, get_logging_mode
from .numeric_utils import clean_numeric, clamp, round_half_up

__all__ = [
    'setup_logger',
    'LoggingContext',
    'set_logging_mode',
    'get_logging_mode',
    'clean_numeric',
    'clamp',
    'round_half_up',
]
