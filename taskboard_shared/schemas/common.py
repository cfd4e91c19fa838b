from enum import Enum

class TaskStatus(str, Enum):
    OPEN = "open"
    DONE = "done"

class TaskGroup(str, Enum):
    PERSONAL = "personal"
    WORK = "work"

class TaskType(str, Enum):
    REGULAR = "regular"
    WORK_FOCUS = "work-focus"
    TO_READ = "to-read"

class Section(str, Enum):
    PERSONAL_FOCUS = "personal-focus"
    TO_READ = "to-read"
    TODAY = "today"
    THIS_WEEK = "this-week"
    NEXT_WEEK = "next-week"
    AFTER_NEXT_WEEK = "after-next-week"
    LONGER_TERM = "longer-term"

# Sections populated from due dates, in display order
DATE_SECTIONS: list["Section"] = [
    Section.TODAY,
    Section.THIS_WEEK,
    Section.NEXT_WEEK,
    Section.AFTER_NEXT_WEEK,
    Section.LONGER_TERM,
]

SECTION_TITLES: dict["Section", str] = {
    Section.PERSONAL_FOCUS: "Personal Focus",
    Section.TO_READ: "To Read",
    Section.TODAY: "Due Today",
    Section.THIS_WEEK: "This Week",
    Section.NEXT_WEEK: "Next Week",
    Section.AFTER_NEXT_WEEK: "After Next Week",
    Section.LONGER_TERM: "Backlog",
}
