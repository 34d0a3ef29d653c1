import attrs


@attrs.define(frozen=True)
class LunchBreak:
    """Hours [from_hour, to_hour) during which no slot may start"""

    from_hour: int
    to_hour: int

    def covers_minute(self, minute: int) -> bool:
        return self.from_hour * 60 <= minute < self.to_hour * 60

    def overlaps_hours(self, from_hour: int, to_hour: int) -> bool:
        return from_hour < self.to_hour and to_hour > self.from_hour


@attrs.define(frozen=True)
class PinLocation:
    lat: float
    lng: float
