"""
Initial song catalog.

Each entry becomes one row in the songs table the first time the
catalog is seeded. start_time is where the clip begins, in seconds.
"""

SEED_SONGS: list[dict] = [
    # Pop Hits
    {"id": 1, "title": "Blinding Lights", "artist": "The Weeknd", "genre": "Pop", "youtube_id": "4NRXx6U8ABQ", "start_time": 30},
    {"id": 2, "title": "Levitating", "artist": "Dua Lipa", "genre": "Pop", "youtube_id": "TUVcZfQe-Kw", "start_time": 45},
    {"id": 3, "title": "As It Was", "artist": "Harry Styles", "genre": "Pop", "youtube_id": "H5v3kku4y6Q", "start_time": 25},
    {"id": 4, "title": "Stay", "artist": "Kid Laroi & Justin Bieber", "genre": "Pop", "youtube_id": "kTJczUoc26U", "start_time": 15},
    {"id": 5, "title": "Bad Guy", "artist": "Billie Eilish", "genre": "Pop", "youtube_id": "DyDfgMOUjCI", "start_time": 20},
    {"id": 6, "title": "Shivers", "artist": "Ed Sheeran", "genre": "Pop", "youtube_id": "Il0S8BoucSA", "start_time": 50},
    {"id": 7, "title": "Heat Waves", "artist": "Glass Animals", "genre": "Pop", "youtube_id": "mRD0-GxqHVo", "start_time": 60},
    {"id": 8, "title": "Peaches", "artist": "Justin Bieber", "genre": "Pop", "youtube_id": "tQ0yjYUFKAE", "start_time": 30},

    # More Pop & R&B
    {"id": 9, "title": "Uptown Funk", "artist": "Bruno Mars", "genre": "Pop", "youtube_id": "OPf0YbXqDm0", "start_time": 60},
    {"id": 10, "title": "Shape of You", "artist": "Ed Sheeran", "genre": "Pop", "youtube_id": "JGwWNGJdvx8", "start_time": 45},
    {"id": 11, "title": "Closer", "artist": "The Chainsmokers ft. Halsey", "genre": "Pop", "youtube_id": "PT2_F-1esPk", "start_time": 55},
    {"id": 12, "title": "Starboy", "artist": "The Weeknd ft. Daft Punk", "genre": "Pop", "youtube_id": "34Na4j8AVgA", "start_time": 40},
    {"id": 13, "title": "Don't Start Now", "artist": "Dua Lipa", "genre": "Pop", "youtube_id": "oygrmJFKYZY", "start_time": 30},
    {"id": 14, "title": "Watermelon Sugar", "artist": "Harry Styles", "genre": "Pop", "youtube_id": "E07s5ZYygMg", "start_time": 35},

    # Hip-Hop & Rap
    {"id": 15, "title": "SICKO MODE", "artist": "Travis Scott", "genre": "Hip-Hop", "youtube_id": "6ONRf7h3Mdk", "start_time": 120},
    {"id": 16, "title": "God's Plan", "artist": "Drake", "genre": "Hip-Hop", "youtube_id": "xpVfcZ0ZcFM", "start_time": 50},
    {"id": 17, "title": "Rockstar", "artist": "Post Malone ft. 21 Savage", "genre": "Hip-Hop", "youtube_id": "UceaB4D0jpo", "start_time": 30},
    {"id": 18, "title": "Hotline Bling", "artist": "Drake", "genre": "Hip-Hop", "youtube_id": "uxpDa-c-4Mc", "start_time": 45},
    {"id": 19, "title": "Sunflower", "artist": "Post Malone & Swae Lee", "genre": "Hip-Hop", "youtube_id": "ApXoWvfEYVU", "start_time": 25},
    {"id": 20, "title": "Old Town Road", "artist": "Lil Nas X", "genre": "Hip-Hop", "youtube_id": "w2Ov5jzm3j8", "start_time": 20},

    # Rock & Alternative
    {"id": 21, "title": "Believer", "artist": "Imagine Dragons", "genre": "Rock", "youtube_id": "7wtfhZwyrcc", "start_time": 55},
    {"id": 22, "title": "Thunder", "artist": "Imagine Dragons", "genre": "Rock", "youtube_id": "fKopy74weus", "start_time": 40},
    {"id": 23, "title": "Stressed Out", "artist": "Twenty One Pilots", "genre": "Rock", "youtube_id": "pXRviuL6vMY", "start_time": 60},
    {"id": 24, "title": "Heathens", "artist": "Twenty One Pilots", "genre": "Rock", "youtube_id": "UprcpdwuwCg", "start_time": 30},

    # Dance & Electronic
    {"id": 25, "title": "Lean On", "artist": "Major Lazer & DJ Snake", "genre": "Electronic", "youtube_id": "YqeW9_5kURI", "start_time": 45},
    {"id": 26, "title": "Titanium", "artist": "David Guetta ft. Sia", "genre": "Electronic", "youtube_id": "JRfuAukYTKg", "start_time": 60},
    {"id": 27, "title": "Wake Me Up", "artist": "Avicii", "genre": "Electronic", "youtube_id": "IcrbM1l_BoI", "start_time": 40},
    {"id": 28, "title": "Clarity", "artist": "Zedd ft. Foxes", "genre": "Electronic", "youtube_id": "IxxstCcJlsc", "start_time": 55},

    # Classic Vibes
    {"id": 29, "title": "Bohemian Rhapsody", "artist": "Queen", "genre": "Classic", "youtube_id": "fJ9rUzIMcZQ", "start_time": 50},
    {"id": 30, "title": "Billie Jean", "artist": "Michael Jackson", "genre": "Classic", "youtube_id": "Zi_XLOBDo_Y", "start_time": 30},
]
