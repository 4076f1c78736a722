"""
In-memory stand-ins for Firestore and Firebase Auth used by the tests.

Only the calls medilog makes are implemented:
collection/document/add/set/get/delete/stream on nested paths.
"""
import copy
import uuid

from medilog.services.identity import AuthError, Credential


class FakeSnapshot:
    def __init__(self, reference, data):
        self.reference = reference
        self.id = reference.id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data) if self._data is not None else None


class FakeDocRef:
    def __init__(self, db, path):
        self.db = db
        self.path = path
        self.id = path[-1]

    def get(self):
        return FakeSnapshot(self, self.db.docs.get(self.path))

    def set(self, data, merge=False):
        if merge and self.path in self.db.docs:
            self.db.docs[self.path].update(copy.deepcopy(data))
        else:
            self.db.docs[self.path] = copy.deepcopy(data)

    def delete(self):
        self.db.docs.pop(self.path, None)

    def collection(self, name):
        return FakeCollection(self.db, self.path + (name,))


class FakeCollection:
    def __init__(self, db, path):
        self.db = db
        self.path = path

    def document(self, doc_id=None):
        return FakeDocRef(self.db, self.path + (doc_id or uuid.uuid4().hex[:20],))

    def add(self, data):
        ref = self.document()
        ref.set(data)
        return None, ref

    def stream(self):
        for path in list(self.db.docs):
            if len(path) == len(self.path) + 1 and path[:-1] == self.path:
                yield FakeDocRef(self.db, path).get()


class FakeFirestore:
    def __init__(self):
        self.docs = {}

    def collection(self, name):
        return FakeCollection(self, (name,))


class FakeIdentity:
    def __init__(self):
        self.accounts = {}  # email -> (password, Credential)
        self.tokens = {}    # id_token -> Credential
        self._next = 0

    def _uid(self):
        self._next += 1
        return f"uid-{self._next}"

    def create_account(self, name, email, password):
        if email in self.accounts:
            raise AuthError("Email already in use")
        cred = Credential(uid=self._uid(), email=email, display_name=name)
        self.accounts[email] = (password, cred)
        return cred

    def verify_password(self, email, password):
        entry = self.accounts.get(email)
        if entry is None or entry[0] != password:
            raise AuthError("INVALID_LOGIN_CREDENTIALS")
        return entry[1]

    def verify_provider_token(self, id_token):
        cred = self.tokens.get(id_token)
        if cred is None:
            raise AuthError("Invalid ID token")
        return cred

    def add_google_user(self, token, name, email):
        cred = Credential(uid=self._uid(), email=email, display_name=name)
        self.tokens[token] = cred
        return cred
