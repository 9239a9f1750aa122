"""Demo listings for a fresh database (`lm seed`). Seeding goes through the importer, so it can be repeated safely."""

import sqlite3

from musicals.importer import ImportResult, reconcile

SAMPLE_MUSICALS = [
    {"title": "Wicked", "venue_name": "Apollo Victoria Theatre", "venue_address": "Wilton Road, London SW1V 1LG",
     "type": "West End", "start_date": "2006-09-27", "end_date": "2025-12-31",
     "description": "The untold story of the Witches of Oz", "ticket_url": "https://wickedthemusical.co.uk", "price_from": 29.50},
    {"title": "The Lion King", "venue_name": "Lyceum Theatre", "venue_address": "21 Wellington St, London WC2E 7RQ",
     "type": "West End", "start_date": "1999-10-19", "end_date": "2025-12-31",
     "description": "Disney's award-winning musical", "ticket_url": "https://thelionking.co.uk", "price_from": 35.00},
    {"title": "Les Miserables", "venue_name": "Sondheim Theatre", "venue_address": "51 Shaftesbury Ave, London W1D 6BA",
     "type": "West End", "start_date": "2004-09-01", "end_date": "2025-12-31",
     "description": "The world's longest running musical", "ticket_url": "https://lesmis.com", "price_from": 25.00},
    {"title": "Hamilton", "venue_name": "Victoria Palace Theatre", "venue_address": "Victoria St, London SW1E 5EA",
     "type": "West End", "start_date": "2017-12-06", "end_date": "2025-12-31",
     "description": "The story of America's Founding Father", "ticket_url": "https://hamiltonmusical.com/london", "price_from": 39.00},
    {"title": "Matilda The Musical", "venue_name": "Cambridge Theatre", "venue_address": "Earlham St, London WC2H 9HU",
     "type": "West End", "start_date": "2011-11-24", "end_date": "2025-12-31",
     "description": "Roald Dahl's beloved story", "ticket_url": "https://matildathemusical.com", "price_from": 24.00},
    {"title": "Hadestown", "venue_name": "Lyric Theatre", "venue_address": "29 Shaftesbury Ave, London W1D 7ES",
     "type": "West End", "start_date": "2024-02-01", "end_date": "2025-06-30",
     "description": "A folk opera journey to the underworld", "ticket_url": "https://hadestown.co.uk", "price_from": 25.00},
    {"title": "Sunset Boulevard", "venue_name": "St James Theatre", "venue_address": "116 Victoria St, London SW1E 5LB",
     "type": "West End", "start_date": "2024-09-01", "end_date": "2025-03-31",
     "description": "Andrew Lloyd Webber revival", "ticket_url": "https://sunsetboulevardmusical.com", "price_from": 35.00},
    {"title": "Cabaret", "venue_name": "Kit Kat Club at the Playhouse", "venue_address": "Northumberland Ave, London WC2N 5DE",
     "type": "West End", "start_date": "2021-11-15", "end_date": "2025-12-31",
     "description": "Willkommen to the Kit Kat Club", "ticket_url": "https://kitkat.club", "price_from": 45.00},
    {"title": "Spring Awakening", "venue_name": "Southwark Playhouse", "venue_address": "77-85 Newington Causeway, London SE1 6BD",
     "type": "Off West End", "start_date": "2025-01-15", "end_date": "2025-03-15",
     "description": "Rock musical about teenage discovery", "ticket_url": "https://southwarkplayhouse.co.uk", "price_from": 18.00},
    {"title": "Into The Woods", "venue_name": "Theatre Royal Stratford East", "venue_address": "Gerry Raffles Square, London E15 1BN",
     "type": "Off West End", "start_date": "2025-02-01", "end_date": "2025-04-01",
     "description": "Sondheim fairy tale mashup", "ticket_url": "https://stratfordeast.com", "price_from": 15.00},
    {"title": "Grease", "venue_name": "LAMDA", "venue_address": "155 Talgarth Rd, London W14 9DA",
     "type": "Drama School", "start_date": "2025-01-20", "end_date": "2025-01-25",
     "description": "Student production of the classic", "ticket_url": "https://lamda.ac.uk", "price_from": 12.00},
    {"title": "Sweeney Todd", "venue_name": "Royal Central School", "venue_address": "62-64 Eton Ave, London NW3 3HY",
     "type": "Drama School", "start_date": "2025-02-10", "end_date": "2025-02-15",
     "description": "Sondheim's dark musical thriller", "ticket_url": "https://cssd.ac.uk", "price_from": 10.00},
    {"title": "Rent", "venue_name": "Mountview Academy", "venue_address": "Ralph Richardson Memorial Studios, London N22 6XF",
     "type": "Drama School", "start_date": "2025-03-01", "end_date": "2025-03-08",
     "description": "The Pulitzer-winning rock musical", "ticket_url": "https://mountview.org.uk", "price_from": 12.00},
]


def seed(conn: sqlite3.Connection) -> ImportResult:
    return reconcile(conn, SAMPLE_MUSICALS)
