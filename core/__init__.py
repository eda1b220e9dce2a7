"""
核心業務邏輯層

這個 package 包含所有核心業務邏輯，包括：
- Session：單一教室的狀態與事件 dispatch
- Session Registry：連線與座號的對應
- Round Manager：網格、搶答模式與回合開關
- Buzz Arbiter：每回合最多一位勝出者
- Locks：並發控制工具
"""
