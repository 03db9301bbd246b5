"""charanim - 角色动画缓存"""

__version__ = "1.0.0"
