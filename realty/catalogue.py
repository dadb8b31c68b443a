# Reference project catalogue loaded by `manage.py seed-projects`.

PROJECTS = [
    {
        "title": "Aura Boulevard",
        "slug": "aura-boulevard",
        "description": "Moderno complejo residencial ubicado estratégicamente en Punta Cana Design District con plaza comercial exclusiva.",
        "price": "Desde US$89,000",
        "location": "Punta Cana Design District",
        "completion": "Diciembre 2025",
        "features": [
            "Suite hotelera y apartamentos de 1-2 habitaciones",
            "Plaza comercial exclusiva en la entrada",
            "Piscinas, jacuzzis climatizados y parque acuático",
            "Cancha de padel y baloncesto",
            "A 5 minutos del aeropuerto internacional",
        ],
        "image_url": "/images/aura-boulevard-1.jpg",
        "images": ["/images/aura-boulevard-1.jpg", "/images/aura-boulevard-2.jpg"],
        "pdf_url": "/pdfs/aura-boulevard.pdf",
    },
    {
        "title": "Secret Garden",
        "slug": "secret-garden",
        "description": "Proyecto cerrado exclusivo en el corazón de Bávaro con área comercial, viviendas unifamiliares y condos.",
        "price": "Desde US$160,000",
        "location": "Bávaro",
        "completion": "Marzo 2026",
        "features": [
            "1, 2 y 3 habitaciones disponibles",
            "Área comercial integrada",
            "Piscina de 1,800m² con pool bar",
            "Gimnasio, coworking y mini-golf",
            "A pasos de Playa Bávaro",
        ],
        "image_url": "/images/secret-garden-1.jpg",
        "images": ["/images/secret-garden-1.jpg", "/images/secret-garden-2.jpg"],
        "pdf_url": "/pdfs/secret-garden.pdf",
    },
    {
        "title": "The Reef",
        "slug": "the-reef",
        "description": "Complejo de lujo en primera línea de playa con hotel, residencias y piscinas naturales en Las Terrenas.",
        "price": "Desde US$165,000",
        "location": "Las Terrenas, Samaná",
        "completion": "Marzo 2026",
        "features": [
            "435 apartamentos de 2 y 3 habitaciones",
            "Hotel de 81 habitaciones integrado",
            "4 piscinas naturales conectadas",
            "Club de playa exclusivo",
        ],
        "image_url": "/images/the-reef-1.jpg",
        "images": ["/images/the-reef-1.jpg", "/images/the-reef-2.jpg"],
        "pdf_url": "/pdfs/the-reef.pdf",
    },
    {
        "title": "Palm Beach Residences",
        "slug": "palm-beach-residences",
        "description": "Torre residencial de lujo con amenidades resort en el prestigioso Cap Cana.",
        "price": "Desde US$225,000",
        "location": "Cap Cana",
        "completion": "Noviembre 2025",
        "features": [
            "Apartamentos de 1 y 2 habitaciones",
            "Piscina infinity con bar",
            "Gimnasio y spa",
            "Acceso directo a la playa",
        ],
        "image_url": "/images/palm-beach-residences-1.jpg",
        "images": ["/images/palm-beach-residences-1.jpg", "/images/palm-beach-residences-2.jpg"],
        "pdf_url": "/pdfs/palm-beach-residences.pdf",
    },
    {
        "title": "Las Cayas Residences",
        "slug": "las-cayas-residences",
        "description": "Complejo residencial tropical con lagunas artificiales y amenidades familiares en entorno natural.",
        "price": "Desde US$145,000",
        "location": "Bávaro",
        "completion": "Octubre 2026",
        "features": [
            "Apartamentos y villas familiares",
            "Lagunas artificiales navegables",
            "Parque acuático para niños",
            "Seguridad 24/7",
        ],
        "image_url": "/images/las-cayas-residences-1.jpg",
        "images": ["/images/las-cayas-residences-1.jpg", "/images/las-cayas-residences-2.jpg"],
        "pdf_url": "/pdfs/las-cayas-residences.pdf",
    },
]
