from pydantic import BaseModel

from smartschedule.schemas.notification import BulkDispatchOut, DispatchOut
from smartschedule.schemas.timetable import TimetableOut


class GenerateTimetableResponse(BaseModel):
    timetable: TimetableOut
    dispatch: BulkDispatchOut


class LectureUpdateResponse(BaseModel):
    timetable: TimetableOut
    dispatch: DispatchOut | None = None
