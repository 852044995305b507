"""
MyTimetable: turn a merged-cell timetable document into a semester of calendar events.
"""
