import pytest
from pydantic import ValidationError

from solupdate.commands import Add, Delete, Optimize, Commit, Rollback, parse_command
from solupdate.document import Document


class TestDocument():

    def test_fields(self):
        doc = Document(fields={'id': '1', 'title': 'x'}, boost=1.5)
        assert doc.fields == {'id': '1', 'title': 'x'}
        assert list(doc) == ['id', 'title']
        assert doc['title'] == 'x'
        assert doc.boost == 1.5
        assert 'id' in doc
        assert len(doc) == 2

    def test_set_none_removes(self):
        doc = Document(fields={'id': '1', 'title': 'x'}, field_boosts={'title': 2.0})
        doc.set_field('title', None)
        assert 'title' not in doc
        assert doc.get_field_boost('title') is None

    def test_add_field(self):
        doc = Document()
        doc.add_field('cat', 'a')
        assert doc['cat'] == 'a'
        doc.add_field('cat', 'b', boost=2.0)
        doc.add_field('cat', 'c')
        assert doc['cat'] == ['a', 'b', 'c']
        assert doc.get_field_boost('cat') == 2.0

    def test_tuple_is_multivalue(self):
        doc = Document(fields={'cat': ('a', 'b')})
        assert doc['cat'] == ['a', 'b']

    def test_field_boost(self):
        doc = Document(fields={'id': '1'})
        assert doc.get_field_boost('id') is None
        assert doc.get_field_boost('nosuch') is None
        doc.set_field('name', 'x', boost=0.0)
        assert doc.get_field_boost('name') == 0.0
        doc.set_field_boost('name', None)
        assert doc.get_field_boost('name') is None

    def test_setitem_delitem(self):
        doc = Document()
        doc['a'] = 1
        doc['b'] = [1, 2]
        del doc['a']
        assert doc.fields == {'b': [1, 2]}

    def test_clear(self):
        doc = Document(fields={'id': '1'}, boost=3.0, field_boosts={'id': 1.0})
        doc.clear()
        assert len(doc) == 0
        assert doc.boost is None
        assert doc.field_boosts == {}

    def test_eq(self):
        assert Document(fields={'a': 1}) == Document(fields={'a': 1})
        assert Document(fields={'a': 1}, boost=2.0) != Document(fields={'a': 1})


class TestCommands():

    def test_defaults_unset(self):
        cmd = Optimize()
        assert cmd.wait_flush is None
        assert cmd.wait_searcher is None
        assert cmd.max_segments is None
        assert Commit().expunge_deletes is None
        assert Add().overwrite is None
        assert Add().documents == []
        assert Delete().ids == []
        assert Rollback().type == 'rollback'

    def test_falsy_kept(self):
        cmd = Commit(wait_flush=False)
        assert cmd.wait_flush is False
        assert Optimize(max_segments=0).max_segments == 0

    def test_frozen(self):
        cmd = Commit()
        with pytest.raises(ValidationError):
            cmd.wait_flush = True

    def test_strict(self):
        with pytest.raises(ValidationError):
            Commit(wait_flush='yes')
        with pytest.raises(ValidationError):
            Add(commit_within='1000')
        with pytest.raises(ValidationError):
            Delete(ids=[1])
        with pytest.raises(ValidationError):
            Rollback(something=1)

    def test_add_documents_from_dict(self):
        cmd = Add(documents=[{'fields': {'id': '1'}, 'boost': 2.0, 'field_boosts': {'id': 1.5}}])
        doc = cmd.documents[0]
        assert isinstance(doc, Document)
        assert doc['id'] == '1'
        assert doc.boost == 2.0
        assert doc.get_field_boost('id') == 1.5

    def test_add_bad_document(self):
        with pytest.raises(ValidationError):
            Add(documents=['not a document'])

    def test_parse_command(self):
        cmd = parse_command({'type': 'commit', 'wait_searcher': True})
        assert isinstance(cmd, Commit)
        assert cmd.wait_searcher is True

        cmd = parse_command({'type': 'delete', 'queries': ['*:*']})
        assert isinstance(cmd, Delete)
        assert cmd.queries == ['*:*']

        cmd = parse_command({'type': 'add', 'documents': [{'fields': {'id': '1'}}]})
        assert isinstance(cmd, Add)
        assert cmd.documents[0]['id'] == '1'

    def test_parse_unknown(self):
        with pytest.raises(ValidationError):
            parse_command({'type': 'reload'})
        with pytest.raises(ValidationError):
            parse_command({'wait_flush': True})


class TestDocumentChecks():

    def test_boost_must_be_number(self):
        with pytest.raises(ValueError):
            Document(boost='1"><delete>')
        with pytest.raises(ValueError):
            Document(boost=True)
        with pytest.raises(ValueError):
            Document(field_boosts={'id': 'high'})
        with pytest.raises(ValueError):
            Document().set_boost('2')
        with pytest.raises(ValueError):
            Document().set_field('id', '1', boost=False)
        assert Document(boost=2).boost == 2
        assert Document(field_boosts={'id': 0.5}).get_field_boost('id') == 0.5

    def test_bad_boost_does_not_set_field(self):
        doc = Document()
        with pytest.raises(ValueError):
            doc.set_field('id', '1', boost='x')
        assert 'id' not in doc

    def test_caller_list_untouched(self):
        tags = ['a']
        doc = Document(fields={'cat': tags})
        doc.add_field('cat', 'b')
        assert tags == ['a']
        assert doc['cat'] == ['a', 'b']

        doc.set_field('cat', tags)
        tags.append('c')
        assert doc['cat'] == ['a']

    def test_add_bad_boost_in_dict(self):
        with pytest.raises(ValidationError):
            Add(documents=[{'fields': {'id': '1'},
                            'boost': '1"></doc></add><delete><query>*:*</query></delete><add><doc b="'}])
        with pytest.raises(ValidationError):
            Add(documents=[{'fields': {'id': '1'}, 'field_boosts': {'id': 'high'}}])
        with pytest.raises(ValidationError):
            Add(documents=[{'fields': {'id': '1'}, 'boost': True}])

    def test_add_malformed_dict(self):
        with pytest.raises(ValidationError):
            parse_command({'type': 'add', 'documents': [{'id': '1', 'title': 'x'}]})
        with pytest.raises(ValidationError):
            parse_command({'type': 'add', 'documents': [{'fields': {'id': '1'}, 'title': 'x'}]})
        with pytest.raises(ValidationError):
            parse_command({'type': 'add', 'documents': [{'fields': ['id', '1']}]})
        with pytest.raises(ValidationError):
            parse_command({'type': 'add', 'documents': [{'fields': {'id': {'nested': 1}}}]})
        with pytest.raises(ValidationError):
            parse_command({'type': 'add', 'documents': [{'fields': {1: 'x'}}]})

    def test_add_dict_values(self):
        cmd = parse_command({'type': 'add', 'documents': [
            {'fields': {'id': '1', 'n': 5, 'ok': True, 'cat': ['a', None], 'gone': None},
             'boost': 1, 'field_boosts': {'id': 2.5}}]})
        doc = cmd.documents[0]
        assert doc.fields == {'id': '1', 'n': 5, 'ok': True, 'cat': ['a', None]}
        assert doc.boost == 1
        assert doc.get_field_boost('id') == 2.5
