import kopf
from kwork.utils.helpers import now


# Liveness probe
@kopf.on.probe(id='now')
def get_current_timestamp(**kwargs):
    return now()


@kopf.on.probe(id='workStore')
def get_work_store(memo: kopf.Memo, **kwargs):
    store = getattr(memo, "work_store", None)
    return type(store).__name__ if store is not None else None
