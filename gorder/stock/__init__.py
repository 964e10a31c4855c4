"""The stock service: item lookups and stock checks."""