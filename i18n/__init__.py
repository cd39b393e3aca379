"""轻量级 i18n 框架 — 零外部依赖。

用法::

    from i18n import t, set_locale

    set_locale("en_US")
    print(t("error.remote_rejection", op="create game", status="Not Found"))

    # 便捷别名
    from i18n import _
    print(_("cli.no_records"))

    # 领域助手
    from i18n import operation_name
    print(operation_name("create_game"))  # → "创建游戏" / "create game"
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

_locale: str = "zh_CN"
_tables: dict[str, dict[str, str]] = {}


def _load_table(locale: str) -> dict[str, str]:
    """按需加载翻译表。"""
    if locale == "zh_CN":
        from .zh_CN import STRINGS
    elif locale == "en_US":
        from .en_US import STRINGS
    else:
        raise ValueError(f"Unsupported locale: {locale}")
    return dict(STRINGS)


def set_locale(locale: str) -> None:
    """设置当前语言。"""
    global _locale
    # 预加载以确保 locale 有效
    if locale not in _tables:
        _tables[locale] = _load_table(locale)
    _locale = locale


def get_locale() -> str:
    """获取当前语言。"""
    return _locale


def get_available_locales() -> list[str]:
    """返回所有可用的 locale 列表。"""
    return ["zh_CN", "en_US"]


def t(key: str, **kwargs: object) -> str:
    """翻译函数。

    查找当前 locale 对应的字符串，用 ``kwargs`` 做 format 替换。
    若 key 缺失则回退到 zh_CN，仍缺失则返回 ``[key]``。

    Args:
        key: 翻译键，如 ``"error.remote_rejection"``。
        **kwargs: 格式化参数，如 ``status="Not Found"``。
    """
    if _locale not in _tables:
        _tables[_locale] = _load_table(_locale)

    template = _tables[_locale].get(key)

    # 回退到 zh_CN
    if template is None and _locale != "zh_CN":
        if "zh_CN" not in _tables:
            _tables["zh_CN"] = _load_table("zh_CN")
        template = _tables["zh_CN"].get(key)
        if template is not None:
            logger.debug("i18n fallback: '%s' not in %s, using zh_CN", key, _locale)

    if template is None:
        logger.warning("i18n missing key: '%s' (lang=%s)", key, _locale)
        return f"[{key}]"

    if kwargs:
        try:
            return template.format_map(kwargs)
        except KeyError as e:
            logger.warning("i18n format error: key='%s', missing=%s", key, e)
            return template
    return template


# ── 便捷别名 ──
_ = t


def operation_name(operation: str) -> str:
    """获取接口操作的显示名，未登记的操作原样返回。

    Args:
        operation: 操作标识符，如 ``"create_game"``、``"get_leaderboard"``。
    """
    key = f"op.{operation}"
    result = t(key)
    return operation if result == f"[{key}]" else result
