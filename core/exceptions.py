"""
自定義異常類別

集中管理所有業務邏輯異常，方便 API 層統一處理：
- ValidationError     -> 400
- NotFoundError       -> 404
- ConstraintViolation -> 409
"""


class TournamentException(Exception):
    """所有賽事系統異常的基類"""
    pass


# ============ 分類 ============

class ValidationError(TournamentException):
    """輸入值不符合規則（年齡下限、性別列舉、場館容量）"""
    pass


class NotFoundError(TournamentException):
    """更新或查詢的目標不存在"""
    pass


class ConstraintViolation(TournamentException):
    """違反資料約束（外鍵懸空、重複主鍵、唯一性）"""
    pass


# ============ Validation 相關異常 ============

class ParticipantAgeInvalid(ValidationError):
    """建立選手時年齡 < 最低年齡（預設 1）"""
    def __init__(self, age, minimum=1):
        self.age = age
        self.minimum = minimum
        super().__init__(f"age must be >= {minimum}, got {age}")


class EnrollmentAgeInvalid(ValidationError):
    """報名賽事時選手年齡 < 參賽年齡（預設 16）"""
    def __init__(self, participant_id, age, minimum=16):
        self.participant_id = participant_id
        self.age = age
        self.minimum = minimum
        super().__init__(
            f"Participant {participant_id} must be >= {minimum} to enter an event, got {age}"
        )


class InvalidGender(ValidationError):
    """性別不在 Male / Female / Other 之內"""
    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid gender {value!r}, expected one of Male, Female, Other")


class VenueCapacityInvalid(ValidationError):
    """場館容量必須 >= 0"""
    def __init__(self, capacity):
        self.capacity = capacity
        super().__init__(f"capacity must be >= 0, got {capacity}")


# ============ NotFound 相關異常 ============

class VenueNotFound(NotFoundError):
    """場館不存在"""
    def __init__(self, venue_id):
        self.venue_id = venue_id
        super().__init__(f"Venue {venue_id} not found")


class ParticipantNotFound(NotFoundError):
    """選手不存在"""
    def __init__(self, participant_id):
        self.participant_id = participant_id
        super().__init__(f"Participant {participant_id} not found")


class EventNotFound(NotFoundError):
    """賽事不存在"""
    def __init__(self, event_id):
        self.event_id = event_id
        super().__init__(f"Event {event_id} not found")


class ScheduleNotFound(NotFoundError):
    """賽程不存在"""
    def __init__(self, schedule_id):
        self.schedule_id = schedule_id
        super().__init__(f"Schedule {schedule_id} not found")


# ============ Constraint 相關異常 ============

class UnknownReference(ConstraintViolation):
    """寫入時引用了不存在的資料（外鍵懸空）"""
    def __init__(self, entity, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} does not exist")


class DuplicateEnrollment(ConstraintViolation):
    """同一位選手重複報名同一場賽事"""
    def __init__(self, event_id, participant_id):
        self.event_id = event_id
        self.participant_id = participant_id
        super().__init__(f"Participant {participant_id} is already enrolled in event {event_id}")


class ScheduleAlreadyExists(ConstraintViolation):
    """賽事已經有一筆有效賽程（每場賽事只能有一筆）"""
    def __init__(self, event_id):
        self.event_id = event_id
        super().__init__(f"Event {event_id} already has a live schedule")


class ImmutableAuditRecord(ConstraintViolation):
    """賽程變更紀錄只能新增，不能修改或刪除"""
    def __init__(self, change_id, operation):
        self.change_id = change_id
        self.operation = operation
        super().__init__(f"ScheduleChange {change_id} is append-only, {operation} rejected")
