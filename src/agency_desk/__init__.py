"""
agency_desk: agency management desk (tasks, clients, due-task notifications, assistant).
"""
