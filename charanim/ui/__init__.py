"""UI 组件"""

from charanim.ui.character_view import CharacterView, DemoCharacterScreen

__all__ = ["CharacterView", "DemoCharacterScreen"]
