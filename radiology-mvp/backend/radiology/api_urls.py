from django.urls import path
from .views import OrderDetailAPIView, OrderSearchAPIView, PatientOrdersJsonView

app_name = 'radiology-api'

urlpatterns = [
    path('orders/search/', OrderSearchAPIView.as_view(), name='order-search'),
    path('orders/<int:order_id>/', OrderDetailAPIView.as_view(), name='order-detail'),
    path('patients/<int:patient_id>/orders/', PatientOrdersJsonView.as_view(), name='patient-orders'),
]
