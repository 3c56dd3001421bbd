from django.urls import path
from .views import PatientDashboardView, RadiologyOrderFormView, RadiologyOrderListView

app_name = 'radiology'

urlpatterns = [
    path('orders/', RadiologyOrderListView.as_view(), name='order-list'),
    path('orders/new/', RadiologyOrderFormView.as_view(), name='order-new'),
    path('orders/<int:order_id>/', RadiologyOrderFormView.as_view(), name='order-form'),
    path('patients/<int:patient_id>/', PatientDashboardView.as_view(), name='patient-dashboard'),
]
