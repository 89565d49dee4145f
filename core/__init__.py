"""
核心業務邏輯層

這個 package 包含所有核心業務邏輯，包括：
- CatalogManager：場館、選手、賽事的建立（賽事建立時產生賽程）
- ScheduleManager：有效賽程與改期
- AuditLogger：賽程變更紀錄
- ResultRecorder：報名與成績
- Locks：並發控制工具
"""
