"""Rating and genre rows every backend starts with."""

RATINGS = [
    {'id': 1, 'name': 'G'},
    {'id': 2, 'name': 'PG'},
    {'id': 3, 'name': 'PG-13'},
    {'id': 4, 'name': 'R'},
    {'id': 5, 'name': 'NC-17'},
]

GENRES = [
    {'id': 1, 'name': 'Comedy'},
    {'id': 2, 'name': 'Drama'},
    {'id': 3, 'name': 'Animation'},
    {'id': 4, 'name': 'Thriller'},
    {'id': 5, 'name': 'Documentary'},
    {'id': 6, 'name': 'Action'},
]
