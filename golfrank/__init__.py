"""golfrank - 大会別ゴルフ選手ランキングエンジン"""

__version__ = "0.1.0"
