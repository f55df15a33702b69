# constants.py
# Controlled vocabularies and static lookup tables (rank table, compliance rules,
# known awards). Treated as read-only configuration.

# Rank table: (code, title, alt_title, tier, level). Higher level = more senior.
RANKS = [
    ("Deckhand", "Deckhand", "", "inactive", 0),
    ("SA", "Seaman Apprentice", "", "inactive", 1),
    ("E-1", "Recruit", "", "recruit", 2),
    ("E-2", "Seaman", "", "junior-enlisted", 3),
    ("E-3", "Able Seaman", "Lance Corporal", "junior-enlisted", 4),
    ("E-4", "Junior Petty Officer", "Corporal", "nco", 5),
    ("E-6", "Petty Officer", "Staff Sergeant", "nco", 6),
    ("E-7", "Chief Petty Officer", "Gunnery Sergeant", "snco", 7),
    ("E-8", "Senior Chief Petty Officer", "Master Sergeant", "snco", 8),
    ("O-1", "Midshipman", "Second Lieutenant", "junior-officer", 9),
    ("O-3", "Lieutenant", "Marine Captain", "junior-officer", 10),
    ("O-4", "Lieutenant Commander", "Major", "senior-officer", 11),
    ("O-5", "Commander", "Lieutenant Colonel", "senior-officer", 12),
    ("O-6", "Captain", "Colonel", "senior-officer", 13),
    ("O-7", "Commodore", "Brigadier General", "admiralty", 14),
    ("O-8", "Rear Admiral", "Major General", "admiralty", 15),
    ("O-9", "Vice Admiral", "", "admiralty", 16),
    ("O-10", "Admiral of the Navy", "", "admiralty", 17),
    ("WO", "Warrant Officer", "", "warrant", 8),
]

RANK_TIERS = [
    "inactive", "recruit", "junior-enlisted", "nco", "snco",
    "junior-officer", "senior-officer", "admiralty", "warrant",
]

# Short forms seen in free-text rank cells ("PO2", "JPO", ...). Exact match only.
RANK_ABBREVIATIONS = {
    "aotn": "O-10",
    "radm": "O-8",
    "lcdr": "O-4",
    "midn": "O-1",
    "scpo": "E-8",
    "cpo": "E-7",
    "po": "E-6",
    "po1": "E-6",
    "po2": "E-6",
    "po3": "E-6",
    "jpo": "E-4",
    "as": "E-3",
}

# --------------------------- Compliance rules -------------------------------

# 1 voyage per month
SAILING_WINDOW_DAYS = 30
# 1 hosted voyage per fortnight (Petty Officer and above)
HOSTING_WINDOW_DAYS = 14

SAILING_APPLIES_TO = {
    "E-2", "E-3", "E-4", "E-5", "E-6", "E-7", "E-8",
    "O-1", "O-3", "O-4", "O-5", "O-6", "O-7", "O-8", "O-9", "O-10",
}
HOSTING_APPLIES_TO = {
    "E-6", "E-7", "E-8",
    "O-1", "O-3", "O-4", "O-5", "O-6", "O-7", "O-8", "O-9", "O-10",
}

LOA_KEYWORDS = ("loa", "yes", "true", "leave")
COMPLIANT_MARKERS = ("yes", "within", "true")
CHECK_GLYPHS = ("✓", "✔")
STAR_GLYPHS = ("★", "⭐", "*")
MAX_CHAT_STARS = 5

DEFAULT_SQUAD = "Unassigned"
COMMAND_SQUAD = "Command Staff"
DEFAULT_COMPLIANCE_STATUS = "Active Duty"

# Name cells that are not crew (repeated header rows, filler dashes)
NAME_PLACEHOLDERS = {"-", "name"}

# --------------------------- Known awards -----------------------------------

# (award_id, sailor_name) pairs already confirmed by command.
KNOWN_AWARDS = [
    ("citation-of-conduct", "Cartel"),
    ("citation-of-voyages", "Cartel"),
    ("citation-of-conduct", "Hoit"),
    ("legion-of-conduct", "Hoit"),
    ("citation-of-voyages", "Hoit"),
    ("legion-of-voyages", "Hoit"),
    ("honorable-voyager", "Hoit"),
    ("meritorious-voyager", "Hoit"),
    ("admirable-voyager", "Hoit"),
    ("sea-service-ribbon", "Hoit"),
    ("maritime-service", "Hoit"),
    ("citation-of-conduct", "Levi"),
    ("citation-of-voyages", "Levi"),
    ("legion-of-voyages", "Levi"),
    ("honorable-voyager", "Levi"),
    ("citation-of-conduct", "Piano"),
    ("citation-of-voyages", "Piano"),
    ("legion-of-voyages", "Piano"),
    ("honorable-voyager", "Piano"),
]

# Subclass award tiers (voyages in a role)
SUBCLASS_TIERS = [(25, "Master"), (15, "Pro"), (5, "Adept")]
