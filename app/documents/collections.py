"""Collection names shared with the front-end's document database."""


class COLLECTIONS:
    USERS = "users"
    MENTORS = "mentors"
    MENTEES = "mentees"
    SESSIONS = "sessions"
    AVAILABILITY = "availability"
    RATINGS = "ratings"
    PAYMENTS = "payments"
