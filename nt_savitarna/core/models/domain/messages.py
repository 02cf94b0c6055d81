"""Lithuanian user-facing messages returned in API envelopes."""

# Auth
LOGIN_FIELDS_REQUIRED = "El. paštas ir slaptažodis yra privalomi"
INVALID_CREDENTIALS = "Neteisingi prisijungimo duomenys"
LOGIN_SUCCESS = "Prisijungimas sėkmingas"
LOGIN_FAILED = "Prisijungimo klaida. Bandykite vėliau."
INVALID_EMAIL = "Neteisingas el. pašto formatas"
PASSWORD_TOO_SHORT = "Slaptažodis turi būti bent 6 simbolių"
INVALID_PHONE = "Neteisingas telefono numerio formatas"
USER_ALREADY_EXISTS = "Vartotojas su šiuo el. paštu jau egzistuoja"
REGISTER_SUCCESS = "Registracija sėkminga"
REGISTER_FAILED = "Registracijos klaida. Bandykite vėliau."
LOGOUT_SUCCESS = "Atsijungimas sėkmingas"
NOT_AUTHENTICATED = "Neprisijungęs"
FORBIDDEN = "Prieiga uždrausta"

# Orders
ORDERS_FETCH_FAILED = "Klaida gaunant užsakymus"
ORDER_FETCH_FAILED = "Klaida gaunant užsakymą"
INVALID_ORDER_ID = "Neteisingas užsakymo ID"
ORDER_NOT_FOUND = "Užsakymas nerastas"
ORDER_ACCESS_DENIED = "Neturite prieigos prie šio užsakymo"
ORDER_UPDATE_FAILED = "Klaida atnaujinant užsakymą"
ORDER_DELETED = "Užsakymas sėkmingai ištrintas"
ORDER_DELETE_FAILED = "Klaida trinant užsakymą"
INVALID_STATUS = "Neteisingas statusas"
REPORT_MUST_BE_PDF = "Ataskaitos failas turi būti PDF formatu"
INVOICE_MUST_BE_PDF = "Sąskaitos failas turi būti PDF formatu"
INVALID_COORDINATES = "Neteisingos koordinatės"

# Geocoding
ADDRESS_MISSING = "Užsakyme nenurodytas adresas"
GEOCODE_NOT_FOUND = "Nepavyko rasti adreso koordinačių"
GEOCODE_FAILED = "Geokodavimo paslauga nepasiekiama"

# Checkout
INVALID_SERVICE = "Neteisinga paslauga"
PAYMENT_DECLINED = "Mokėjimas atmestas. Bandykite dar kartą."
CHECKOUT_FAILED = "Mokėjimo klaida"

# Admin
STATS_FETCH_FAILED = "Klaida gaunant statistiką"
FILTERS_FETCH_FAILED = "Klaida gaunant filtrus"
USERS_FETCH_FAILED = "Klaida gaunant klientus"
VALUATORS_FETCH_FAILED = "Klaida gaunant vertintojus"
VALUATOR_FETCH_FAILED = "Klaida gaunant vertintojo duomenis"
INVALID_VALUATOR_ID = "Netinkamas vertintojo ID"
VALUATOR_NOT_FOUND = "Vertintojas nerastas"
VALUATOR_ALREADY_EXISTS = "Vertintojas su šiuo kodu jau egzistuoja"

# Reports
REPORT_FETCH_FAILED = "Klaida gaunant ataskaitą"
EXPORT_FAILED = "Klaida eksportuojant ataskaitą"
INVALID_DATE = "Neteisingas datos formatas"
INVALID_DATE_RANGE = "Pradžios data negali būti vėlesnė už pabaigos datą"
INVALID_REPORT_TYPE = "Neteisingas ataskaitos tipas"
INVALID_EXPORT_FORMAT = "Neteisingas eksporto formatas"

# Seed
SEED_DISABLED = "Negalima produkcinėje aplinkoje"

# Generic
INVALID_REQUEST = "Neteisingi užklausos duomenys"
DUPLICATE_RECORD = "Toks įrašas jau egzistuoja"
INTERNAL_ERROR = "Vidinė serverio klaida"
