"""本地化表。

语言代码 -> LanguageProfile 的静态映射，启动时加载一次，之后只读：

- display_strings: 界面文案（问候语、兜底消息等）。
- system_instruction_template: (feature, session_id) -> 带语言限定的系统提示词。
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Tuple

from aura_core.domain.exceptions import ValidationError
from aura_core.domain.models import FeatureKind
from aura_core.localization.strings import REQUIRED_KEYS, STRINGS
from aura_core.prompts.personas import InstructionTemplate, make_instruction_template


@dataclass(frozen=True)
class LanguageProfile:
    code: str
    name: str
    display_strings: Mapping[str, str]
    system_instruction_template: InstructionTemplate

    def text(self, key: str) -> str:
        return self.display_strings[key]

    def system_instruction(self, feature: FeatureKind, session_id: str) -> str:
        return self.system_instruction_template(feature, session_id)


def _profile(code: str, name: str) -> LanguageProfile:
    strings = STRINGS[code]
    missing = REQUIRED_KEYS - set(strings)
    if missing:
        raise ValidationError(
            code="INCOMPLETE_LOCALIZATION",
            message=f"Language {code!r} is missing keys: {sorted(missing)}",
        )
    return LanguageProfile(
        code=code,
        name=name,
        display_strings=MappingProxyType(dict(strings)),
        system_instruction_template=make_instruction_template(name),
    )


LOCALIZATION_TABLE: Mapping[str, LanguageProfile] = MappingProxyType({
    "en": _profile("en", "English"),
    "es": _profile("es", "Español"),
    "fr": _profile("fr", "Français"),
})


def get_profile(code: str) -> LanguageProfile:
    """根据语言代码获取 LanguageProfile，代码不区分大小写。"""

    key = (code or "").strip().lower()
    try:
        return LOCALIZATION_TABLE[key]
    except KeyError:
        raise ValidationError(code="UNKNOWN_LANGUAGE", message=f"Unknown language: {code!r}") from None


def available_languages() -> List[Tuple[str, str]]:
    return [(p.code, p.name) for p in LOCALIZATION_TABLE.values()]
