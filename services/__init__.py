"""
服務層

這個 package 包含純計算邏輯，不負責狀態轉換：
- ZoneService：可搶答區 / 禁答區計算
"""
