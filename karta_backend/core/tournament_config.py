# karta_backend/core/tournament_config.py
"""
tournament_config.py
--------------------
Defines the demo tournament (groups, teams and a roster template) loaded by
seed/seed_tournament.py.

- Four groups (A–D) of four teams each
- Every team gets the same seven-player roster template; player names are
  drawn from DEMO_PLAYER_NAMES in order so each squad is distinct
"""

TOURNAMENT_NAME = "Karta Cup V"

tournament_config = {
    "A": ["Karta Muda", "Garuda Selatan", "Putra Bahari", "Rajawali FC"],
    "B": ["Satria Utama", "Bintang Timur", "Elang Perkasa", "Tunas Harapan"],
    "C": ["Persada United", "Laskar Pelangi", "Mitra Jaya", "Sinar Pagi"],
    "D": ["Cahaya Kampung", "Harimau Muda", "Angkasa FC", "Banteng Merah"],
}

# (shirt number, position)
ROSTER_TEMPLATE = [
    (1, "GK"),
    (2, "DF"),
    (4, "DF"),
    (6, "MF"),
    (8, "MF"),
    (9, "FW"),
    (10, "FW"),
]

DEMO_PLAYER_NAMES = [
    "Adi", "Bagus", "Cahyo", "Dimas", "Eko", "Fajar", "Gilang", "Hendra",
    "Irfan", "Joko", "Kurnia", "Lukman", "Made", "Nanda", "Oki", "Putu",
    "Rizki", "Slamet", "Taufik", "Umar", "Wahyu", "Yoga", "Zaki", "Arif",
    "Bayu", "Dodi", "Edo", "Feri", "Gede", "Hadi", "Iwan", "Jaka",
]
