"""
どこで: `engine` パッケージ。
何を: 時間源とフレーム駆動の基盤（`engine.core`）。
"""
