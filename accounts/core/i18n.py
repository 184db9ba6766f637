import json
from pathlib import Path
from fastapi import Request

from core.config import settings


class I18n:
    """
    로케일별 번역 테이블 묶음

    locales/<lang>/translation.json 을 모두 읽어서 {lang: {key: text}} 로 보관합니다.
    앱 생성 시 app.state.i18n 에 주입해서 사용 (테스트에서는 고정 테이블 주입 가능)
    """

    def __init__(self, tables: dict[str, dict[str, str]], default_language: str = "en"):
        if default_language not in tables:
            raise ValueError(f"기본 언어 '{default_language}' 번역 테이블이 없습니다")
        self.tables = tables
        self.default_language = default_language

    @classmethod
    def load(cls, locales_dir: Path, default_language: str = "en") -> "I18n":
        tables = {}
        for path in sorted(Path(locales_dir).glob("*/translation.json")):
            with path.open(encoding="utf-8") as f:
                tables[path.parent.name] = json.load(f)
        return cls(tables, default_language)

    @property
    def languages(self) -> list[str]:
        return list(self.tables)

    def pick_language(self, accept_language: str | None) -> str:
        """Accept-Language 헤더에서 지원하는 첫 번째 언어 선택 (없으면 기본 언어)"""
        if not accept_language:
            return self.default_language

        # "np-NP,np;q=0.9,en;q=0.8" → ["np", "np", "en"]
        for part in accept_language.split(","):
            tag = part.split(";")[0].strip().lower()
            primary = tag.split("-")[0]
            if primary in self.tables:
                return primary
        return self.default_language

    def translator(self, accept_language: str | None) -> "Translator":
        return Translator(self.tables[self.pick_language(accept_language)])


class Translator:
    """메시지 키 → 현지화된 문장. 없는 키는 키 그대로 반환"""

    def __init__(self, table: dict[str, str]):
        self.table = table

    def __call__(self, key: str) -> str:
        return self.table.get(key, key)


def create_i18n() -> I18n:
    return I18n.load(settings.locales_dir, settings.default_language)


# FastAPI Depends()용
def get_translator(request: Request) -> Translator:
    i18n: I18n = request.app.state.i18n
    return i18n.translator(request.headers.get("accept-language"))
