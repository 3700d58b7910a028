from enum import Enum

class SearchIntent(str, Enum):
    informational = "Informational"
    commercial = "Commercial"
    transactional = "Transactional"
    navigational = "Navigational"

class KeywordDifficulty(str, Enum):
    easy = "Easy"
    medium = "Medium"
    hard = "Hard"

# Sort weight used by the strategy table.
DIFFICULTY_WEIGHT = {
    KeywordDifficulty.easy: 1,
    KeywordDifficulty.medium: 2,
    KeywordDifficulty.hard: 3,
}
