"""
Tests for editable pages and site settings
"""
import pytest

from skyway.models import PageContent, SiteSetting


@pytest.fixture
def about_page(db, admin_user):
    page = PageContent(slug='about-us', title='About Us', content='Who we are', updated_by=admin_user.id)
    db.session.add(page)
    db.session.commit()
    return page


class TestPublicContent:

    def test_list_pages(self, client, about_page):
        response = client.get('/api/page-contents')

        assert response.status_code == 200
        assert [p['slug'] for p in response.get_json()['data']['pages']] == ['about-us']

    def test_page_by_slug(self, client, about_page):
        response = client.get('/api/page-contents/About-Us')

        assert response.status_code == 200
        assert response.get_json()['data']['page']['title'] == 'About Us'

    def test_unknown_slug(self, client):
        assert client.get('/api/page-contents/missing').status_code == 404

    def test_settings(self, client, db):
        db.session.add_all([SiteSetting(key='site_name', value='Skyway'), SiteSetting(key='currency', value='USD')])
        db.session.commit()

        settings = client.get('/api/site-settings').get_json()['data']['settings']
        assert [s['key'] for s in settings] == ['currency', 'site_name']

        assert client.get('/api/site-settings/site_name').get_json()['data']['setting']['value'] == 'Skyway'
        assert client.get('/api/site-settings/missing').status_code == 404


class TestPageManagement:

    def test_create_page(self, client, admin_headers, admin_user):
        response = client.post('/api/admin/page-contents', json={
            'slug': 'Terms',
            'title': 'Terms and Conditions',
            'content': 'Be nice.'
        }, headers=admin_headers)

        assert response.status_code == 201
        page = response.get_json()['data']['page']
        assert page['slug'] == 'terms'
        assert page['updatedBy'] == admin_user.id

    def test_duplicate_slug(self, client, admin_headers, about_page):
        response = client.post('/api/admin/page-contents', json={
            'slug': 'about-us',
            'title': 'Again',
            'content': 'Duplicate'
        }, headers=admin_headers)
        assert response.status_code == 409

    def test_invalid_slug(self, client, admin_headers):
        response = client.post('/api/admin/page-contents', json={
            'slug': 'about us!',
            'title': 'About',
            'content': 'x'
        }, headers=admin_headers)

        assert response.status_code == 422
        assert 'slug' in response.get_json()['errors']

    def test_update_page(self, client, admin_headers, about_page, db):
        response = client.put(
            f'/api/admin/page-contents/{about_page.id}',
            json={'content': 'Updated story'},
            headers=admin_headers
        )

        assert response.status_code == 200
        db.session.expire_all()
        saved = db.session.get(PageContent, about_page.id)
        assert saved.content == 'Updated story'
        assert saved.title == 'About Us'

    def test_update_to_taken_slug(self, client, admin_headers, about_page, db):
        other = PageContent(slug='faq', title='FAQ', content='Questions')
        db.session.add(other)
        db.session.commit()

        response = client.put(f'/api/admin/page-contents/{other.id}', json={'slug': 'about-us'}, headers=admin_headers)
        assert response.status_code == 409

    def test_delete_page(self, client, admin_headers, about_page, db):
        page_id = about_page.id

        assert client.delete(f'/api/admin/page-contents/{page_id}', headers=admin_headers).status_code == 200
        assert db.session.get(PageContent, page_id) is None
        assert client.delete(f'/api/admin/page-contents/{page_id}', headers=admin_headers).status_code == 404


class TestSettingManagement:

    def test_create_then_overwrite(self, client, admin_headers, db):
        first = client.post('/api/admin/site-settings', json={'key': 'site_name', 'value': 'Skyway'},
                            headers=admin_headers)
        second = client.post('/api/admin/site-settings', json={'key': 'site_name', 'value': 'Skyway Air'},
                             headers=admin_headers)

        assert first.status_code == 201
        assert second.status_code == 200
        assert SiteSetting.query.count() == 1
        assert db.session.get(SiteSetting, 'site_name').value == 'Skyway Air'

    def test_value_is_required(self, client, admin_headers):
        response = client.post('/api/admin/site-settings', json={'key': 'site_name'}, headers=admin_headers)
        assert response.status_code == 422

    def test_delete_setting(self, client, admin_headers, db):
        db.session.add(SiteSetting(key='banner', value='Sale!'))
        db.session.commit()

        assert client.delete('/api/admin/site-settings/banner', headers=admin_headers).status_code == 200
        assert client.delete('/api/admin/site-settings/banner', headers=admin_headers).status_code == 404
